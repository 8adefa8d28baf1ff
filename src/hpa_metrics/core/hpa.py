#!/usr/bin/env python3
"""
Metric generators for HorizontalPodAutoscaler objects

Every generator is a pure function of one autoscaler snapshot returning a fresh
MetricFamily. Generators are wrapped with wrap_hpa_func so each record starts
with the (namespace, hpa) labels, and collected in HPA_METRIC_FAMILIES.
"""

from enum import Enum
from functools import wraps
from typing import Callable, Dict, Optional, NamedTuple, Tuple

from ..models import (
    HorizontalPodAutoscaler,
    MetricFamily,
    MetricRecord,
    MetricSourceType,
    MetricSpec,
    MetricStatus,
    Quantity,
)
from .labels import add_condition_metrics, kube_labels_to_prometheus_labels
from .logging_config import get_logger
from .quantity import as_int64, milli_value

logger = get_logger(__name__)

METRIC_TYPE_GAUGE = "gauge"

DEFAULT_LABELS = ("namespace", "hpa")
TARGET_METRIC_LABELS = ("metric_name", "metric_target_type")
CONDITION_LABELS = ("condition", "status")

RESOURCE_CPU = "cpu"


class MetricTargetType(Enum):
    """Which derived quantity a target record carries; iteration order is emission order"""

    VALUE = "value"
    UTILIZATION = "utilization"
    AVERAGE = "average"


HPAFunc = Callable[[HorizontalPodAutoscaler], MetricFamily]
TargetValues = Dict[MetricTargetType, Optional[int]]


class FamilyGenerator(NamedTuple):
    """Descriptor pairing a metric name with the function generating it"""
    name: str
    type: str
    help: str
    generate: HPAFunc


def wrap_hpa_func(func: HPAFunc) -> HPAFunc:
    """
    Prefix every record produced by func with the object's namespace and name

    Args:
        func: Generator returning records with facet-specific labels only

    Returns:
        Generator with the same signature whose records begin with the
        (namespace, hpa) label pair
    """
    @wraps(func)
    def wrapper(hpa: HorizontalPodAutoscaler) -> MetricFamily:
        family = func(hpa)
        return MetricFamily(metrics=[
            MetricRecord(
                label_keys=[*DEFAULT_LABELS, *metric.label_keys],
                label_values=[hpa.namespace, hpa.name, *metric.label_values],
                value=metric.value
            )
            for metric in family.metrics
        ])

    return wrapper


def _single(value: float) -> MetricFamily:
    return MetricFamily(metrics=[MetricRecord(value=float(value))])


# Spec targets

def _object_targets(metric: MetricSpec) -> Optional[Tuple[str, TargetValues]]:
    source = metric.object_
    if source is None:
        return None
    return source.metric.name, {
        MetricTargetType.VALUE: as_int64(source.target.value),
        MetricTargetType.AVERAGE: as_int64(source.target.average_value),
    }


def _pods_targets(metric: MetricSpec) -> Optional[Tuple[str, TargetValues]]:
    source = metric.pods
    if source is None:
        return None
    return source.metric.name, {
        MetricTargetType.AVERAGE: as_int64(source.target.average_value),
    }


def _resource_targets(metric: MetricSpec) -> Optional[Tuple[str, TargetValues]]:
    source = metric.resource
    if source is None:
        return None
    return source.name, {
        MetricTargetType.UTILIZATION: source.target.average_utilization,
        MetricTargetType.AVERAGE: as_int64(source.target.average_value),
    }


def _external_targets(metric: MetricSpec) -> Optional[Tuple[str, TargetValues]]:
    source = metric.external
    if source is None:
        return None
    # value and averageValue are mutually exclusive upstream; emit whichever is set
    return source.metric.name, {
        MetricTargetType.VALUE: as_int64(source.target.value),
        MetricTargetType.AVERAGE: as_int64(source.target.average_value),
    }


_TARGET_EXTRACTORS: Dict[MetricSourceType, Callable[[MetricSpec], Optional[Tuple[str, TargetValues]]]] = {
    MetricSourceType.OBJECT: _object_targets,
    MetricSourceType.PODS: _pods_targets,
    MetricSourceType.RESOURCE: _resource_targets,
    MetricSourceType.EXTERNAL: _external_targets,
}


def hpa_spec_target_metric(hpa: HorizontalPodAutoscaler) -> MetricFamily:
    """
    One record per target type defined by each entry of spec.metrics

    Entries of an unsupported type, and target slots whose quantity is not an
    exact integer, produce no record.
    """
    metrics = []
    for metric in hpa.spec.metrics:
        extract = _TARGET_EXTRACTORS.get(metric.source_type)
        resolved = extract(metric) if extract else None
        if resolved is None:
            logger.debug(f"Skipping unsupported metric type {metric.type!r} on {hpa.namespace}/{hpa.name}")
            continue

        metric_name, values = resolved
        for target_type in MetricTargetType:
            value = values.get(target_type)
            if value is None:
                continue
            metrics.append(MetricRecord(
                label_keys=list(TARGET_METRIC_LABELS),
                label_values=[metric_name, target_type.value],
                value=float(value)
            ))

    return MetricFamily(metrics=metrics)


# Status current metrics

_CURRENT_AVERAGE_VALUES: Dict[MetricSourceType, Callable[[MetricStatus], Optional[Quantity]]] = {
    MetricSourceType.RESOURCE: lambda m: m.resource.current.average_value if m.resource else None,
    MetricSourceType.PODS: lambda m: m.pods.current.average_value if m.pods else None,
    MetricSourceType.OBJECT: lambda m: m.object_.current.average_value if m.object_ else None,
    MetricSourceType.EXTERNAL: lambda m: m.external.current.average_value if m.external else None,
}


def _current_average_value(metric: MetricStatus) -> Optional[float]:
    select = _CURRENT_AVERAGE_VALUES.get(metric.source_type)
    if select is None:
        return None

    quantity = select(metric)
    if quantity is None:
        return None

    # CPU is reported in cores, keep fractional cores
    if metric.source_type == MetricSourceType.RESOURCE and metric.resource.name == RESOURCE_CPU:
        millis = milli_value(quantity)
        return millis / 1000 if millis is not None else None

    value = as_int64(quantity)
    return float(value) if value is not None else None


def hpa_status_current_metrics_average_value(hpa: HorizontalPodAutoscaler) -> MetricFamily:
    """Average value observed for each current metric that can be converted"""
    metrics = []
    for metric in hpa.status.current_metrics:
        value = _current_average_value(metric)
        if value is None:
            logger.debug(f"Skipping current metric {metric.type!r} on {hpa.namespace}/{hpa.name}")
            continue
        metrics.append(MetricRecord(value=value))
    return MetricFamily(metrics=metrics)


def hpa_status_current_metrics_average_utilization(hpa: HorizontalPodAutoscaler) -> MetricFamily:
    """Average utilization observed for resource metrics"""
    metrics = []
    for metric in hpa.status.current_metrics:
        if metric.source_type != MetricSourceType.RESOURCE or metric.resource is None:
            continue
        utilization = metric.resource.current.average_utilization
        if utilization is not None:
            metrics.append(MetricRecord(value=float(utilization)))
    return MetricFamily(metrics=metrics)


# Simple fields

def hpa_metadata_generation(hpa: HorizontalPodAutoscaler) -> MetricFamily:
    return _single(hpa.metadata.generation)


def hpa_spec_max_replicas(hpa: HorizontalPodAutoscaler) -> MetricFamily:
    return _single(hpa.spec.max_replicas)


def hpa_spec_min_replicas(hpa: HorizontalPodAutoscaler) -> MetricFamily:
    # Defaulted to 1 by the API server; an unset value is skipped
    if hpa.spec.min_replicas is None:
        return MetricFamily()
    return _single(hpa.spec.min_replicas)


def hpa_status_current_replicas(hpa: HorizontalPodAutoscaler) -> MetricFamily:
    return _single(hpa.status.current_replicas)


def hpa_status_desired_replicas(hpa: HorizontalPodAutoscaler) -> MetricFamily:
    return _single(hpa.status.desired_replicas)


def hpa_labels(hpa: HorizontalPodAutoscaler) -> MetricFamily:
    label_keys, label_values = kube_labels_to_prometheus_labels(hpa.metadata.labels)
    return MetricFamily(metrics=[MetricRecord(label_keys=label_keys, label_values=label_values, value=1.0)])


def hpa_status_condition(hpa: HorizontalPodAutoscaler) -> MetricFamily:
    metrics = []
    for condition in hpa.status.conditions:
        for metric in add_condition_metrics(condition.status):
            metrics.append(MetricRecord(
                label_keys=list(CONDITION_LABELS),
                label_values=[condition.type, *metric.label_values],
                value=metric.value
            ))
    return MetricFamily(metrics=metrics)


HPA_METRIC_FAMILIES: Tuple[FamilyGenerator, ...] = (
    FamilyGenerator(
        name="kube_hpa_metadata_generation",
        type=METRIC_TYPE_GAUGE,
        help="The generation observed by the HorizontalPodAutoscaler controller.",
        generate=wrap_hpa_func(hpa_metadata_generation)
    ),
    FamilyGenerator(
        name="kube_hpa_spec_max_replicas",
        type=METRIC_TYPE_GAUGE,
        help="Upper limit for the number of pods that can be set by the autoscaler; cannot be smaller than MinReplicas.",
        generate=wrap_hpa_func(hpa_spec_max_replicas)
    ),
    FamilyGenerator(
        name="kube_hpa_spec_min_replicas",
        type=METRIC_TYPE_GAUGE,
        help="Lower limit for the number of pods that can be set by the autoscaler, default 1.",
        generate=wrap_hpa_func(hpa_spec_min_replicas)
    ),
    FamilyGenerator(
        name="kube_hpa_spec_target_metric",
        type=METRIC_TYPE_GAUGE,
        help="The metric specifications used by this autoscaler when calculating the desired replica count.",
        generate=wrap_hpa_func(hpa_spec_target_metric)
    ),
    FamilyGenerator(
        name="kube_hpa_status_current_replicas",
        type=METRIC_TYPE_GAUGE,
        help="Current number of replicas of pods managed by this autoscaler.",
        generate=wrap_hpa_func(hpa_status_current_replicas)
    ),
    FamilyGenerator(
        name="kube_hpa_status_desired_replicas",
        type=METRIC_TYPE_GAUGE,
        help="Desired number of replicas of pods managed by this autoscaler.",
        generate=wrap_hpa_func(hpa_status_desired_replicas)
    ),
    FamilyGenerator(
        name="kube_hpa_labels",
        type=METRIC_TYPE_GAUGE,
        help="Kubernetes labels converted to Prometheus labels.",
        generate=wrap_hpa_func(hpa_labels)
    ),
    FamilyGenerator(
        name="kube_hpa_status_condition",
        type=METRIC_TYPE_GAUGE,
        help="The condition of this autoscaler.",
        generate=wrap_hpa_func(hpa_status_condition)
    ),
    FamilyGenerator(
        name="kube_hpa_status_current_metrics_average_value",
        type=METRIC_TYPE_GAUGE,
        help="Average metric value observed by the autoscaler.",
        generate=wrap_hpa_func(hpa_status_current_metrics_average_value)
    ),
    FamilyGenerator(
        name="kube_hpa_status_current_metrics_average_utilization",
        type=METRIC_TYPE_GAUGE,
        help="Average metric utilization observed by the autoscaler.",
        generate=wrap_hpa_func(hpa_status_current_metrics_average_utilization)
    ),
)
