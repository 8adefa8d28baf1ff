#!/usr/bin/env python3
"""
Pydantic models for generated metric records and families
"""

from typing import List
from pydantic import BaseModel, Field, model_validator


class MetricRecord(BaseModel):
    """One labeled observation within a metric family"""
    label_keys: List[str] = Field(default_factory=list, description="Ordered label names")
    label_values: List[str] = Field(default_factory=list, description="Label values matching label_keys")
    value: float = Field(..., description="Observed value")

    @model_validator(mode="after")
    def _check_labels(self) -> "MetricRecord":
        if len(self.label_keys) != len(self.label_values):
            raise ValueError(
                f"label keys and values differ in length: {self.label_keys} / {self.label_values}"
            )
        if len(set(self.label_keys)) != len(self.label_keys):
            raise ValueError(f"duplicate label keys: {self.label_keys}")
        return self

    @property
    def labels(self) -> dict:
        return dict(zip(self.label_keys, self.label_values))


class MetricFamily(BaseModel):
    """Records produced by one generator for one object"""
    metrics: List[MetricRecord] = Field(default_factory=list)
