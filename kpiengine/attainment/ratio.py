from __future__ import annotations
from enum import Enum
from typing import Dict, List, Optional
import math

from kpiengine.periods.normalizer import PeriodRecord


class Polarity(str, Enum):
    HIGHER_IS_BETTER = "higher-is-better"
    LOWER_IS_BETTER = "lower-is-better"


def ratio(target: float, actual: Optional[float], polarity: Polarity) -> Optional[float]:
    """Attainment % of one target/actual pair; None when undefined.

    higher-is-better: actual / target * 100 (None if target == 0)
    lower-is-better:  target / actual * 100 (None if actual == 0)
    Results that overflow to inf/nan are None as well.
    """
    if actual is None:
        return None
    if polarity == Polarity.LOWER_IS_BETTER:
        if actual == 0:
            return None
        return finite_or_none(float(target) / float(actual) * 100.0)
    if target == 0:
        return None
    return finite_or_none(float(actual) / float(target) * 100.0)


def finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def per_period_ratios(records: List[PeriodRecord], polarity: Polarity) -> Dict[str, Optional[float]]:
    return {r.competency: ratio(r.target, r.actual, polarity) for r in records}
