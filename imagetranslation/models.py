"""
Image Translation Models
Pydantic models for translation configs as delivered by config sources

Wire keys follow the VirtletImageMapping spec (e.g. `translations`, `regexp`,
`maxRedirects`); python field names are accepted as well.
"""

from typing import Dict, List, Optional, get_origin

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _PayloadModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    @field_validator('*', mode='before')
    @classmethod
    def nulls_to_empty(cls, v, info):
        """YAML `key:` with no value arrives as None; treat it as unset"""
        annotation = cls.model_fields[info.field_name].annotation
        origin = get_origin(annotation)
        if v is None:
            if annotation is str:
                return ""
            if annotation is bool:
                return False
            if annotation is int:
                return 0
            if origin is list:
                return []
            if origin is dict:
                return {}
            return v
        # Null entries (`- ` or `name:` with no body) are empty records
        if origin is list and isinstance(v, list):
            return [{} if item is None else item for item in v]
        if origin is dict and isinstance(v, dict):
            return {key: {} if item is None else item for key, item in v.items()}
        return v


class CertRecord(_PayloadModel):
    """PEM text for one client certificate and its key (blocks may be mixed)"""
    cert: str = ""
    key: str = ""


class TLSProfile(_PayloadModel):
    """TLS section of a transport profile"""
    server_name: str = Field("", alias='serverName')
    insecure: bool = False
    certificates: List[CertRecord] = Field(default_factory=list)


class TransportProfile(_PayloadModel):
    """Named network settings that rules refer to via `transport`"""
    timeout_milliseconds: int = Field(0, alias='timeout')
    proxy: str = ""
    max_redirects: Optional[int] = Field(None, alias='maxRedirects')
    tls: Optional[TLSProfile] = None


class TranslationRule(_PayloadModel):
    """
    Single name-to-URL mapping.

    Either `name` (exact match) or `regex` is expected to be set. `url` is a
    literal for name rules and a $-template for regex rules.
    """
    name: str = ""
    regex: str = Field("", alias='regexp')
    url: str = ""
    transport: str = ""


class TranslationConfig(_PayloadModel):
    """Named bundle of rules and transport profiles"""
    name: str = ""
    prefix: str = ""
    rules: List[TranslationRule] = Field(default_factory=list, alias='translations')
    transports: Dict[str, TransportProfile] = Field(default_factory=dict)
