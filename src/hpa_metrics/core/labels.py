#!/usr/bin/env python3
"""
Label helpers shared by the metric generators
"""

import re
from typing import Dict, List, Tuple

from ..models import MetricRecord

_INVALID_LABEL_CHARS = re.compile(r"[^a-zA-Z0-9_]")

CONDITION_STATUSES = ("true", "false", "unknown")


def sanitize_label_name(name: str) -> str:
    """Replace characters Prometheus does not allow in label names"""
    return _INVALID_LABEL_CHARS.sub("_", name)


def kube_labels_to_prometheus_labels(labels: Dict[str, str]) -> Tuple[List[str], List[str]]:
    """
    Convert Kubernetes object labels to Prometheus label keys and values

    Keys are rendered as ``label_<sanitized key>``; when several keys sanitize
    to the same name, the first one in sorted order is kept.
    """
    label_key_map: Dict[str, str] = {}
    for key in sorted(labels or {}):
        label_key_map.setdefault(f"label_{sanitize_label_name(key)}", key)

    label_keys = sorted(label_key_map)
    label_values = [labels[label_key_map[key]] for key in label_keys]
    return label_keys, label_values


def add_condition_metrics(status: str) -> List[MetricRecord]:
    """One record per possible condition status, 1.0 on the matching one"""
    current = (status or "").lower()
    return [
        MetricRecord(
            label_keys=["status"],
            label_values=[candidate],
            value=1.0 if current == candidate else 0.0
        )
        for candidate in CONDITION_STATUSES
    ]
