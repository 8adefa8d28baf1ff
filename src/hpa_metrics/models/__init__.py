"""
Models package for autoscaler objects and generated metrics
"""

from .hpa import (
    Quantity,
    MetricSourceType,
    ObjectMeta,
    MetricIdentifier,
    MetricTarget,
    MetricValueStatus,
    MetricSpec,
    MetricStatus,
    HPACondition,
    HPASpec,
    HPAStatus,
    HorizontalPodAutoscaler,
)
from .metrics import MetricRecord, MetricFamily

__all__ = [
    # Autoscaler object
    "Quantity",
    "MetricSourceType",
    "ObjectMeta",
    "MetricIdentifier",
    "MetricTarget",
    "MetricValueStatus",
    "MetricSpec",
    "MetricStatus",
    "HPACondition",
    "HPASpec",
    "HPAStatus",
    "HorizontalPodAutoscaler",

    # Generated metrics
    "MetricRecord",
    "MetricFamily",
]
