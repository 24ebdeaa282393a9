"""
Kubernetes custom resource config source.

Reads VirtletImageMapping objects from a namespace. The object's `spec` is
the translation config and `metadata.name` its name.
"""

import logging
from typing import Any, Dict, List, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from pydantic import ValidationError

from ..context import ReloadContext
from ..models import TranslationConfig
from .base import ConfigHandle, ConfigSource, SourceUnavailableError

logger = logging.getLogger(__name__)

CRD_GROUP = "virtlet.k8s"
CRD_VERSION = "v1"
CRD_PLURAL = "virtletimagemappings"


def build_api_client(kubeconfig: Optional[str] = None) -> client.ApiClient:
    """
    Create a Kubernetes API client.

    Args:
        kubeconfig: Path to a kubeconfig file; in-cluster config is used when None

    Raises:
        kubernetes.config.ConfigException: If no usable configuration is found
    """
    if kubeconfig:
        return config.new_client_from_config(config_file=kubeconfig)

    configuration = client.Configuration()
    config.load_incluster_config(client_configuration=configuration)
    return client.ApiClient(configuration=configuration)


class CRDConfigHandle(ConfigHandle):
    """VirtletImageMapping object already fetched by the list call"""

    def __init__(self, obj: Dict[str, Any]):
        self.obj = obj

    @property
    def name(self) -> str:
        return (self.obj.get('metadata') or {}).get('name', '')

    def payload(self) -> TranslationConfig:
        spec = self.obj.get('spec') or {}
        if not isinstance(spec, dict):
            raise SourceUnavailableError(f"VirtletImageMapping {self.name} has a malformed spec")
        try:
            return TranslationConfig.model_validate(spec)
        except ValidationError as e:
            raise SourceUnavailableError(f"Invalid VirtletImageMapping {self.name}: {e}")


class CRDConfigSource(ConfigSource):
    """
    Reads translation configs from VirtletImageMapping custom resources.

    Args:
        namespace: Namespace to list objects in (usually kube-system)
        api_client: Configured kubernetes ApiClient
    """

    def __init__(self, namespace: str, api_client: client.ApiClient):
        self.namespace = namespace
        self.api = client.CustomObjectsApi(api_client)

    @property
    def description(self) -> str:
        return f"VirtletImageMapping objects in namespace {self.namespace}"

    def configs(self, ctx: ReloadContext) -> List[ConfigHandle]:
        if ctx.cancelled:
            raise SourceUnavailableError("reload cancelled")

        try:
            result = self.api.list_namespaced_custom_object(
                CRD_GROUP,
                CRD_VERSION,
                self.namespace,
                CRD_PLURAL,
                _request_timeout=ctx.remaining(),
            )
        except ApiException as e:
            raise SourceUnavailableError(f"Kubernetes API error {e.status}: {e.reason}")
        except Exception as e:
            # urllib3 connection/timeouts surface as various exception types
            raise SourceUnavailableError(f"Cannot list {CRD_PLURAL}: {e}")

        items = result.get('items') or []
        logger.debug(f"Found {len(items)} VirtletImageMapping objects in {self.namespace}")
        return [CRDConfigHandle(item) for item in items]
