"""
Shared fixtures for exporter tests
"""

from typing import Any, Dict, List, Optional

import pytest

from hpa_metrics.models import HorizontalPodAutoscaler


def hpa_dict(
    name: str = "my-hpa",
    namespace: str = "default",
    min_replicas: Optional[int] = 1,
    max_replicas: int = 10,
    metrics: Optional[List[Dict[str, Any]]] = None,
    current_metrics: Optional[List[Dict[str, Any]]] = None,
    conditions: Optional[List[Dict[str, Any]]] = None,
    labels: Optional[Dict[str, str]] = None,
    generation: int = 1,
    current_replicas: int = 2,
    desired_replicas: int = 3
) -> Dict[str, Any]:
    """Autoscaler in the dict form returned by the API server"""
    spec = {
        "maxReplicas": max_replicas,
        "metrics": metrics or [],
        "scaleTargetRef": {"apiVersion": "apps/v1", "kind": "Deployment", "name": name},
    }
    if min_replicas is not None:
        spec["minReplicas"] = min_replicas

    return {
        "apiVersion": "autoscaling/v2",
        "kind": "HorizontalPodAutoscaler",
        "metadata": {
            "name": name,
            "namespace": namespace,
            "generation": generation,
            "labels": labels or {},
        },
        "spec": spec,
        "status": {
            "currentReplicas": current_replicas,
            "desiredReplicas": desired_replicas,
            "conditions": conditions or [],
            "currentMetrics": current_metrics or [],
        },
    }


def make_hpa(**kwargs) -> HorizontalPodAutoscaler:
    return HorizontalPodAutoscaler.model_validate(hpa_dict(**kwargs))


def resource_spec(name: str = "cpu", **target) -> Dict[str, Any]:
    return {"type": "Resource", "resource": {"name": name, "target": target}}


def resource_status(name: str = "cpu", **current) -> Dict[str, Any]:
    return {"type": "Resource", "resource": {"name": name, "current": current}}


@pytest.fixture
def full_hpa() -> HorizontalPodAutoscaler:
    """Autoscaler using all four metric source kinds"""
    return make_hpa(
        labels={"app": "web", "app.kubernetes.io/part-of": "shop"},
        metrics=[
            resource_spec("cpu", type="Utilization", averageUtilization=80),
            {
                "type": "Pods",
                "pods": {
                    "metric": {"name": "packets-per-second"},
                    "target": {"type": "AverageValue", "averageValue": "1k"},
                },
            },
            {
                "type": "Object",
                "object": {
                    "metric": {"name": "requests-per-second"},
                    "describedObject": {"apiVersion": "networking.k8s.io/v1", "kind": "Ingress", "name": "main"},
                    "target": {"type": "Value", "value": "10k"},
                },
            },
            {
                "type": "External",
                "external": {
                    "metric": {"name": "queue_messages_ready"},
                    "target": {"type": "AverageValue", "averageValue": "30"},
                },
            },
        ],
        current_metrics=[
            resource_status("cpu", averageValue="1500m", averageUtilization=60),
            {
                "type": "Pods",
                "pods": {"metric": {"name": "packets-per-second"}, "current": {"averageValue": "800"}},
            },
        ],
        conditions=[
            {"type": "AbleToScale", "status": "True", "reason": "ReadyForNewScale"},
            {"type": "ScalingLimited", "status": "False"},
        ],
    )
