#!/usr/bin/env python3
"""
Image Translation Tool
Command-line utility to show which endpoint an image name resolves to
"""

import sys
import json
import argparse

from .config.settings import TranslatorConfig, setup_logging
from .context import ReloadContext
from .sources import build_api_client
from .translator import build_default_translator


def main(argv=None):
    settings = TranslatorConfig()

    parser = argparse.ArgumentParser(description="Resolve an image name using image translation configs")
    parser.add_argument("name", help="Image name to translate")
    parser.add_argument("--config-dir", "-d", default=settings.config_dir, help="Directory with translation config files")
    parser.add_argument("--allow-regexp", "-r", action="store_true", default=settings.allow_regex, help="Enable regexp rules")
    parser.add_argument("--use-crd", action="store_true", default=settings.use_crd, help="Read VirtletImageMapping objects from the cluster")
    parser.add_argument("--kubeconfig", default=settings.kubeconfig, help="Kubeconfig path (in-cluster config if omitted)")
    parser.add_argument("--namespace", "-n", default=settings.namespace, help="Namespace of VirtletImageMapping objects")
    parser.add_argument("--timeout", "-t", type=float, default=settings.reload_timeout, help="Config reload deadline in seconds")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    settings.reload_timeout = args.timeout
    if args.debug:
        settings.log_level = 'DEBUG'
    try:
        settings.validate()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    setup_logging(settings.log_level, settings.log_file)

    api_client = None
    if args.use_crd:
        try:
            api_client = build_api_client(args.kubeconfig)
        except Exception as e:
            print(f"Error: cannot configure Kubernetes client: {e}", file=sys.stderr)
            return 1

    translate = build_default_translator(args.config_dir, args.allow_regexp, api_client, args.namespace)
    endpoint = translate(ReloadContext(timeout=args.timeout), args.name)

    print(json.dumps(endpoint.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
