"""
Severity classification for area impact analysis.

This module maps a continuous magnitude score onto a discrete
severity tier using fixed thresholds.
"""

import math
from typing import List, Tuple

from .errors import InvalidMagnitude
from .models import SeverityTier

MAGNITUDE_MIN = 0.0
MAGNITUDE_MAX = 10.0

# (하한 포함 임계값, 등급), 높은 값부터 검사
SEVERITY_THRESHOLDS: List[Tuple[float, SeverityTier]] = [
    (9.0, SeverityTier.CRITICAL),
    (7.0, SeverityTier.SEVERE),
    (5.0, SeverityTier.HIGH),
    (3.0, SeverityTier.MODERATE),
    (MAGNITUDE_MIN, SeverityTier.LOW),
]


def classify(magnitude: float) -> SeverityTier:
    """
    규모를 심각도 등급으로 분류합니다.

    범위를 벗어난 값은 보정하지 않고 거부합니다.

    Args:
        magnitude: 0 이상 10 이하의 규모

    Returns:
        심각도 등급

    Raises:
        InvalidMagnitude: 값이 NaN이거나 [0, 10] 범위를 벗어난 경우
    """
    try:
        value = float(magnitude)
    except (TypeError, ValueError):
        raise InvalidMagnitude(magnitude)

    if math.isnan(value) or not (MAGNITUDE_MIN <= value <= MAGNITUDE_MAX):
        raise InvalidMagnitude(magnitude)

    for threshold, tier in SEVERITY_THRESHOLDS:
        if value >= threshold:
            return tier

    return SeverityTier.LOW
