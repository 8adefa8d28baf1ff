#!/usr/bin/env python3
"""
Pydantic models for the HorizontalPodAutoscaler resource (autoscaling/v2)

Objects are validated from the camelCase dict form returned by the API server.
Extractors only read these models, they never mutate them.
"""

from enum import Enum
from typing import Dict, Any, List, Optional, Union
from pydantic import BaseModel, Field

# Kubernetes quantities arrive as strings ("500m", "1Gi") or plain numbers
Quantity = Union[str, int, float]


class MetricSourceType(str, Enum):
    """Metric source kinds understood by the exporter"""

    RESOURCE = "Resource"
    PODS = "Pods"
    OBJECT = "Object"
    EXTERNAL = "External"


class _APIModel(BaseModel):
    class Config:
        populate_by_name = True
        extra = "ignore"


class ObjectMeta(_APIModel):
    """Subset of object metadata used for metric labels"""
    name: str = Field(..., description="Object name")
    namespace: str = Field("", description="Object namespace")
    generation: int = Field(0, description="Sequence number of the desired state")
    labels: Dict[str, str] = Field(default_factory=dict, description="Object labels")


class MetricIdentifier(_APIModel):
    name: str = Field(..., description="Name of the given metric")
    selector: Optional[Dict[str, Any]] = Field(None, description="Label selector for the metric")


class MetricTarget(_APIModel):
    """Target value, average value or average utilization of a metric"""
    type: Optional[str] = Field(None, description="Utilization, Value or AverageValue")
    value: Optional[Quantity] = Field(None, description="Raw target value")
    average_value: Optional[Quantity] = Field(None, alias="averageValue", description="Target average value")
    average_utilization: Optional[int] = Field(
        None, alias="averageUtilization", description="Target average utilization percentage"
    )


class MetricValueStatus(_APIModel):
    """Observed value of a metric"""
    value: Optional[Quantity] = Field(None, description="Current raw value")
    average_value: Optional[Quantity] = Field(None, alias="averageValue", description="Current average value")
    average_utilization: Optional[int] = Field(
        None, alias="averageUtilization", description="Current average utilization percentage"
    )


class ResourceMetricSource(_APIModel):
    name: str = Field(..., description="Resource name, e.g. cpu or memory")
    target: MetricTarget = Field(default_factory=MetricTarget)


class PodsMetricSource(_APIModel):
    metric: MetricIdentifier
    target: MetricTarget = Field(default_factory=MetricTarget)


class ObjectMetricSource(_APIModel):
    metric: MetricIdentifier
    target: MetricTarget = Field(default_factory=MetricTarget)
    described_object: Optional[Dict[str, Any]] = Field(None, alias="describedObject")


class ExternalMetricSource(_APIModel):
    metric: MetricIdentifier
    target: MetricTarget = Field(default_factory=MetricTarget)


class ResourceMetricStatus(_APIModel):
    name: str
    current: MetricValueStatus = Field(default_factory=MetricValueStatus)


class PodsMetricStatus(_APIModel):
    metric: MetricIdentifier
    current: MetricValueStatus = Field(default_factory=MetricValueStatus)


class ObjectMetricStatus(_APIModel):
    metric: MetricIdentifier
    current: MetricValueStatus = Field(default_factory=MetricValueStatus)
    described_object: Optional[Dict[str, Any]] = Field(None, alias="describedObject")


class ExternalMetricStatus(_APIModel):
    metric: MetricIdentifier
    current: MetricValueStatus = Field(default_factory=MetricValueStatus)


class _MetricSourceUnion(_APIModel):
    # Unknown type strings are kept verbatim so they can be skipped downstream
    type: str = Field(..., description="Metric source type")

    @property
    def source_type(self) -> Optional[MetricSourceType]:
        """The known source type, or None for unsupported kinds"""
        try:
            return MetricSourceType(self.type)
        except ValueError:
            return None


class MetricSpec(_MetricSourceUnion):
    """One entry of spec.metrics; exactly one variant field is populated"""
    resource: Optional[ResourceMetricSource] = None
    pods: Optional[PodsMetricSource] = None
    object_: Optional[ObjectMetricSource] = Field(None, alias="object")
    external: Optional[ExternalMetricSource] = None


class MetricStatus(_MetricSourceUnion):
    """One entry of status.currentMetrics, mirroring MetricSpec"""
    resource: Optional[ResourceMetricStatus] = None
    pods: Optional[PodsMetricStatus] = None
    object_: Optional[ObjectMetricStatus] = Field(None, alias="object")
    external: Optional[ExternalMetricStatus] = None


class HPACondition(_APIModel):
    type: str = Field(..., description="Condition type, e.g. AbleToScale")
    status: str = Field(..., description="True, False or Unknown")
    reason: Optional[str] = None
    message: Optional[str] = None


class HPASpec(_APIModel):
    min_replicas: Optional[int] = Field(None, alias="minReplicas", description="Lower replica limit")
    max_replicas: int = Field(..., alias="maxReplicas", description="Upper replica limit")
    metrics: List[MetricSpec] = Field(default_factory=list)
    scale_target_ref: Optional[Dict[str, Any]] = Field(None, alias="scaleTargetRef")


class HPAStatus(_APIModel):
    current_replicas: int = Field(0, alias="currentReplicas")
    desired_replicas: int = Field(0, alias="desiredReplicas")
    conditions: List[HPACondition] = Field(default_factory=list)
    current_metrics: List[MetricStatus] = Field(default_factory=list, alias="currentMetrics")


class HorizontalPodAutoscaler(_APIModel):
    """Snapshot of a single autoscaler object"""
    metadata: ObjectMeta
    spec: HPASpec
    status: HPAStatus = Field(default_factory=HPAStatus)

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @property
    def name(self) -> str:
        return self.metadata.name
