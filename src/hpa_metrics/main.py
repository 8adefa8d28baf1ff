#!/usr/bin/env python3
"""
HPA Metrics Exporter - Main Entry Point
Exposes kube_hpa_* metrics for every HorizontalPodAutoscaler in the cluster
"""

import os
import sys
import signal
import threading
from typing import Optional

from .api.server import APIServer
from .config import Settings
from .core.collector import build_registry
from .core.logging_config import setup_logging, get_logger
from .core.store import HPAStore, load_kubernetes_config


class ExporterService:
    """Main exporter service that coordinates all components"""

    def __init__(self, config_path: Optional[str] = None, namespace: Optional[str] = None):
        """Initialize the exporter service"""
        if config_path and os.path.exists(config_path):
            self.settings = Settings.load_from_yaml_with_env_override(config_path)
        else:
            self.settings = Settings()

        if namespace is not None:
            self.settings.kubernetes.namespace = namespace

        self.config = self.settings.get_config_dict()

        setup_logging(
            level=self.settings.logging.level,
            log_file=self.settings.logging.file,
            enable_colors=True,
            log_format=self.settings.logging.format
        )
        self.logger = get_logger(__name__)
        self._stopped = threading.Event()

        load_kubernetes_config(
            in_cluster=self.settings.kubernetes.in_cluster,
            kubeconfig_path=self.settings.kubernetes.kubeconfig_path
        )

        self.store = HPAStore(
            namespace=self.settings.kubernetes.namespace,
            resync_period=self.settings.exporter.resync_period,
            watch_timeout=self.settings.exporter.watch_timeout
        )
        self.registry = build_registry(self.store)
        self.api_server = APIServer(self.store, self.registry, self.config)

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        self.logger.info("HPA Metrics Exporter initialized")
        if self.settings.debug:
            self.logger.info(f"Debug mode enabled. Settings: {self.config}")

    def _signal_handler(self, signum, frame):
        """Handle shutdown signals"""
        self.logger.info(f"Received signal {signum}, shutting down...")
        self._stopped.set()

    def run(self):
        """Start the watch and the API server, then block until a shutdown signal"""
        self.logger.info("Starting HPA Metrics Exporter...")
        self.store.start()

        exporter = self.settings.exporter
        api_thread = threading.Thread(
            target=self.api_server.run,
            kwargs={'host': exporter.host, 'port': exporter.port},
            daemon=True
        )
        api_thread.start()
        self.logger.info(f"API server started on {exporter.host}:{exporter.port}")

        while not self._stopped.wait(timeout=60):
            self.logger.debug(f"Tracking {len(self.store)} HorizontalPodAutoscalers")

        self.logger.info("Exporter service stopped")

    def cleanup(self):
        """Cleanup resources"""
        self.store.stop()
        self.logger.info("Cleanup completed")


def main():
    """Entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='HorizontalPodAutoscaler metrics exporter')
    parser.add_argument(
        '--config',
        default=os.getenv('CONFIG_PATH', '/app/config/config.yaml'),
        help='Path to configuration file'
    )
    parser.add_argument(
        '--namespace',
        default=None,
        help='Only watch autoscalers in this namespace (default: all namespaces)'
    )

    args = parser.parse_args()

    try:
        service = ExporterService(args.config, namespace=args.namespace)
    except Exception as e:
        get_logger(__name__).error(f"Failed to start exporter: {e}", exc_info=True)
        sys.exit(1)

    try:
        service.run()
    except KeyboardInterrupt:
        service.logger.info("Received keyboard interrupt")
    except Exception as e:
        service.logger.error(f"Fatal error: {e}")
        sys.exit(1)
    finally:
        service.cleanup()


if __name__ == "__main__":
    main()
