"""
Core exporter modules
"""

from .hpa import (
    HPA_METRIC_FAMILIES,
    FamilyGenerator,
    MetricTargetType,
    wrap_hpa_func,
)
from .collector import HPACollector, build_registry, render_metrics
from .store import HPAStore, load_kubernetes_config

__all__ = [
    "HPA_METRIC_FAMILIES",
    "FamilyGenerator",
    "MetricTargetType",
    "wrap_hpa_func",
    "HPACollector",
    "build_registry",
    "render_metrics",
    "HPAStore",
    "load_kubernetes_config"
]
