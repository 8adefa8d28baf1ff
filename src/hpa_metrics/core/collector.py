#!/usr/bin/env python3
"""
Prometheus collector exposing the kube_hpa_* families
"""

from typing import Iterable, Iterator, Optional, Sequence
from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import GaugeMetricFamily

from ..models import HorizontalPodAutoscaler
from .hpa import HPA_METRIC_FAMILIES, FamilyGenerator
from .logging_config import get_logger

logger = get_logger(__name__)


class HPACollector:
    """Custom collector generating every family for every stored autoscaler"""

    def __init__(self, store, generators: Sequence[FamilyGenerator] = HPA_METRIC_FAMILIES):
        """
        Initialize collector

        Args:
            store: Object source exposing snapshot()
            generators: Ordered family generators
        """
        self.store = store
        self.generators = generators

    def describe(self) -> Iterable:
        # Families are built at scrape time
        return []

    def collect(self) -> Iterator[GaugeMetricFamily]:
        objects = self.store.snapshot()
        for generator in self.generators:
            yield build_family(generator, objects)


def build_family(generator: FamilyGenerator, objects: Iterable[HorizontalPodAutoscaler]) -> GaugeMetricFamily:
    """Run one generator over every object and gather the samples"""
    family = GaugeMetricFamily(generator.name, generator.help)
    for hpa in objects:
        for metric in generator.generate(hpa).metrics:
            family.add_sample(generator.name, metric.labels, metric.value)
    return family


def build_registry(store, registry: Optional[CollectorRegistry] = None) -> CollectorRegistry:
    """Register an HPACollector for store, on a dedicated registry by default"""
    registry = registry or CollectorRegistry()
    registry.register(HPACollector(store))
    logger.info(f"Registered {len(HPA_METRIC_FAMILIES)} HorizontalPodAutoscaler metric families")
    return registry


def render_metrics(registry: CollectorRegistry) -> bytes:
    """Text exposition of everything in registry"""
    return generate_latest(registry)
