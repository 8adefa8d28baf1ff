"""
Tests for the HorizontalPodAutoscaler object source
"""

from unittest.mock import Mock, patch

import pytest

from kubernetes.client.rest import ApiException

from hpa_metrics.core.store import HPAStore, load_kubernetes_config

from conftest import hpa_dict


def list_result(*items, resource_version="100"):
    return Mock(items=list(items), metadata=Mock(resource_version=resource_version))


@pytest.fixture
def api():
    return Mock()


class TestHPAStore:

    def test_resync_all_namespaces(self, api):
        api.list_horizontal_pod_autoscaler_for_all_namespaces.return_value = list_result(
            hpa_dict(name="a"), hpa_dict(name="b", namespace="prod")
        )
        store = HPAStore(api=api)

        assert not store.synced
        assert store.resync() == "100"
        assert store.synced
        assert [(h.namespace, h.name) for h in store.snapshot()] == [("default", "a"), ("prod", "b")]

    def test_resync_single_namespace(self, api):
        api.list_namespaced_horizontal_pod_autoscaler.return_value = list_result(hpa_dict(namespace="prod"))
        store = HPAStore(api=api, namespace="prod")

        store.resync()

        api.list_namespaced_horizontal_pod_autoscaler.assert_called_once_with("prod")
        api.list_horizontal_pod_autoscaler_for_all_namespaces.assert_not_called()
        assert len(store) == 1

    def test_malformed_objects_are_skipped(self, api):
        broken = hpa_dict(name="broken")
        del broken["spec"]["maxReplicas"]
        api.list_horizontal_pod_autoscaler_for_all_namespaces.return_value = list_result(broken, hpa_dict(name="ok"))
        store = HPAStore(api=api)

        store.resync()

        assert [h.name for h in store.snapshot()] == ["ok"]

    def test_watch_events(self, api):
        store = HPAStore(api=api)

        store.apply_event({"type": "ADDED", "raw_object": hpa_dict(name="a", max_replicas=4)})
        store.apply_event({"type": "MODIFIED", "raw_object": hpa_dict(name="a", max_replicas=8)})
        assert [h.spec.max_replicas for h in store.snapshot()] == [8]

        store.apply_event({"type": "DELETED", "raw_object": hpa_dict(name="a")})
        assert store.snapshot() == []

    def test_error_events_are_ignored(self, api):
        store = HPAStore(api=api)
        store.apply_event({"type": "ERROR", "raw_object": {"kind": "Status", "code": 410}})
        assert store.snapshot() == []

    def test_snapshot_is_a_copy(self, api):
        store = HPAStore(api=api)
        store.apply_event({"type": "ADDED", "raw_object": hpa_dict()})

        snapshot = store.snapshot()
        snapshot.clear()

        assert len(store) == 1


class TestHPAStoreLifecycle:

    def test_stop_joins_watch_thread(self, api):
        api.list_horizontal_pod_autoscaler_for_all_namespaces.side_effect = ApiException(status=500, reason="boom")
        store = HPAStore(api=api, resync_period=60)

        store.start()
        store.stop(timeout=5)

        assert not store._thread.is_alive()

    def test_stop_before_start(self, api):
        HPAStore(api=api).stop()


class TestLoadKubernetesConfig:

    def test_in_cluster(self):
        with patch("hpa_metrics.core.store.k8s_config") as k8s_config:
            load_kubernetes_config(in_cluster=True)
            k8s_config.load_incluster_config.assert_called_once()
            k8s_config.load_kube_config.assert_not_called()

    def test_missing_kubeconfig(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_kubernetes_config(in_cluster=False, kubeconfig_path=str(tmp_path / "missing"))

    def test_kubeconfig_file(self, tmp_path):
        kubeconfig = tmp_path / "kubeconfig"
        kubeconfig.write_text("apiVersion: v1\n")
        with patch("hpa_metrics.core.store.k8s_config") as k8s_config:
            load_kubernetes_config(in_cluster=False, kubeconfig_path=str(kubeconfig))
            k8s_config.load_kube_config.assert_called_once_with(config_file=str(kubeconfig))
