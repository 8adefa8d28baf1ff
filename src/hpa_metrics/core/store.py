#!/usr/bin/env python3
"""
HorizontalPodAutoscaler object source

Lists autoscalers through the Kubernetes API and keeps the snapshot current by
following a watch stream.
"""

import os
import threading
from typing import Any, Dict, List, Optional, Tuple
from kubernetes import client, watch
from kubernetes import config as k8s_config
from kubernetes.client import ApiClient
from kubernetes.client.rest import ApiException
from pydantic import ValidationError

from ..models import HorizontalPodAutoscaler
from .logging_config import get_logger

logger = get_logger(__name__)


def load_kubernetes_config(in_cluster: bool, kubeconfig_path: Optional[str] = None) -> None:
    """Load in-cluster credentials or a kubeconfig file"""
    if in_cluster:
        logger.info("Loading in-cluster config")
        k8s_config.load_incluster_config()
        return

    if kubeconfig_path and not os.path.exists(kubeconfig_path):
        logger.error(f"Kubeconfig file not found at: {kubeconfig_path}")
        raise FileNotFoundError(f"Kubeconfig file not found: {kubeconfig_path}")

    logger.info(f"Loading kubeconfig from: {kubeconfig_path or 'default location'}")
    k8s_config.load_kube_config(config_file=kubeconfig_path)


class HPAStore:
    """Thread-safe snapshot of the autoscalers visible to the exporter"""

    def __init__(
        self,
        api: Optional[client.AutoscalingV2Api] = None,
        namespace: str = "",
        resync_period: int = 30,
        watch_timeout: int = 300
    ):
        """
        Initialize the store

        Args:
            api: Autoscaling v2 API client
            namespace: Namespace to watch, empty for all namespaces
            resync_period: Seconds to wait before re-listing after a failure
            watch_timeout: Server-side timeout of a single watch request
        """
        self.api = api or client.AutoscalingV2Api()
        self.namespace = namespace
        self.resync_period = resync_period
        self.watch_timeout = watch_timeout

        self._serializer = ApiClient()
        self._lock = threading.Lock()
        self._objects: Dict[Tuple[str, str], HorizontalPodAutoscaler] = {}
        self._synced = threading.Event()
        self._stop_event = threading.Event()
        self._watch: Optional[watch.Watch] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def synced(self) -> bool:
        """Whether the initial list has completed"""
        return self._synced.is_set()

    def snapshot(self) -> List[HorizontalPodAutoscaler]:
        """Current objects, in insertion order"""
        with self._lock:
            return list(self._objects.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._objects)

    def _list_call(self):
        if self.namespace:
            return self.api.list_namespaced_horizontal_pod_autoscaler, (self.namespace,)
        return self.api.list_horizontal_pod_autoscaler_for_all_namespaces, ()

    def _convert(self, obj: Any) -> Optional[HorizontalPodAutoscaler]:
        data = obj if isinstance(obj, dict) else self._serializer.sanitize_for_serialization(obj)
        try:
            return HorizontalPodAutoscaler.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Skipping malformed HorizontalPodAutoscaler: {e}")
            return None

    def resync(self) -> Optional[str]:
        """
        Replace the snapshot with a fresh list

        Returns:
            The list resource version to start watching from
        """
        list_func, args = self._list_call()
        result = list_func(*args)

        objects = {}
        for item in result.items:
            hpa = self._convert(item)
            if hpa is not None:
                objects[(hpa.namespace, hpa.name)] = hpa

        with self._lock:
            self._objects = objects
        self._synced.set()

        logger.info(f"Listed {len(objects)} HorizontalPodAutoscalers")
        return result.metadata.resource_version if result.metadata else None

    def apply_event(self, event: Dict[str, Any]) -> None:
        """Apply one watch event to the snapshot"""
        event_type = event.get("type")
        obj = event.get("raw_object") or event.get("object")

        if event_type not in ("ADDED", "MODIFIED", "DELETED"):
            logger.warning(f"Ignoring watch event of type {event_type}")
            return

        hpa = self._convert(obj)
        if hpa is None:
            return

        key = (hpa.namespace, hpa.name)
        with self._lock:
            if event_type == "DELETED":
                self._objects.pop(key, None)
            else:
                self._objects[key] = hpa
        logger.debug(f"{event_type} HorizontalPodAutoscaler {key[0]}/{key[1]}")

    def run(self) -> None:
        """List then watch until stopped, re-listing after every stream ends"""
        while not self._stop_event.is_set():
            try:
                resource_version = self.resync()
                list_func, args = self._list_call()
                self._watch = watch.Watch()
                for event in self._watch.stream(
                    list_func,
                    *args,
                    resource_version=resource_version,
                    timeout_seconds=self.watch_timeout
                ):
                    if self._stop_event.is_set():
                        break
                    self.apply_event(event)
                continue
            except ApiException as e:
                logger.error(f"Kubernetes API error while watching HorizontalPodAutoscalers: {e.status} {e.reason}")
            except Exception as e:
                logger.error(f"Error watching HorizontalPodAutoscalers: {e}", exc_info=True)

            self._stop_event.wait(self.resync_period)

        logger.info("HorizontalPodAutoscaler watch stopped")

    def start(self) -> None:
        """Run the list/watch loop in a background thread"""
        self._thread = threading.Thread(target=self.run, name="hpa-store", daemon=True)
        self._thread.start()
        logger.info(f"Watching HorizontalPodAutoscalers in {self.namespace or 'all namespaces'}")

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the watch and wait up to timeout seconds for the loop to exit"""
        self._stop_event.set()
        if self._watch:
            self._watch.stop()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning(f"Watch thread still running after {timeout}s")
