#!/usr/bin/env python3
"""
Kubernetes quantity conversions used by the metric extractors
"""

from decimal import Decimal, ROUND_CEILING
from typing import Optional
from kubernetes.utils import parse_quantity

from ..models import Quantity
from .logging_config import get_logger

logger = get_logger(__name__)

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def _parse(quantity: Quantity) -> Optional[Decimal]:
    try:
        value = parse_quantity(quantity)
    except ValueError as e:
        logger.debug(f"Ignoring malformed quantity {quantity!r}: {e}")
        return None
    return value if value.is_finite() else None


def as_int64(quantity: Optional[Quantity]) -> Optional[int]:
    """
    Convert a quantity to an integer without loss

    Args:
        quantity: Quantity string or number, may be None

    Returns:
        The integer value, or None when the quantity is absent, fractional
        or outside the signed 64-bit range
    """
    if quantity is None:
        return None

    value = _parse(quantity)
    if value is None or value != value.to_integral_value():
        return None

    integer = int(value)
    if integer < INT64_MIN or integer > INT64_MAX:
        return None
    return integer


def milli_value(quantity: Optional[Quantity]) -> Optional[int]:
    """Quantity expressed in thousandths, rounded up"""
    if quantity is None:
        return None

    value = _parse(quantity)
    if value is None:
        return None
    return int((value * 1000).to_integral_value(rounding=ROUND_CEILING))
