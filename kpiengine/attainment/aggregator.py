from __future__ import annotations
from enum import Enum
from typing import List, Optional
import math

from kpiengine.attainment.ratio import Polarity, finite_or_none, ratio
from kpiengine.periods.normalizer import PeriodRecord


class AggregationMode(str, Enum):
    EVOLUTION = "evolution"      # latest measured period
    AVERAGE = "average"          # mean of period attainments
    ACCUMULATED = "accumulated"  # ratio of summed actuals to summed targets


def last_measured_index(records: List[PeriodRecord]) -> Optional[int]:
    for i in range(len(records) - 1, -1, -1):
        if records[i].measured:
            return i
    return None


def evolution(records: List[PeriodRecord], polarity: Polarity) -> Optional[float]:
    k = last_measured_index(records)
    if k is None:
        return None
    return ratio(records[k].target, records[k].actual, polarity)


def average(records: List[PeriodRecord], polarity: Polarity) -> float:
    """Mean of the computable period attainments; 0.0 when there are none.

    Unmeasured periods (and measured ones whose ratio is undefined) count in
    neither the sum nor the denominator.
    """
    values = [ratio(r.target, r.actual, polarity) for r in records if r.measured]
    values = [v for v in values if v is not None]
    if not values:
        return 0.0
    mean = sum(v / len(values) for v in values)
    return mean if math.isfinite(mean) else 0.0


def accumulated(
    records: List[PeriodRecord],
    polarity: Polarity,
    end: int,
    target_end: Optional[int] = None,
) -> Optional[float]:
    """Sum actuals over [0..end] and targets over [0..target_end], then take one ratio.

    target_end defaults to end. Unmeasured periods add 0 to the actual sum.
    """
    if target_end is None:
        target_end = end
    actual_sum = sum(r.actual for r in records[: end + 1] if r.actual is not None)
    target_sum = sum(r.target for r in records[: target_end + 1])
    if finite_or_none(actual_sum) is None or finite_or_none(target_sum) is None:
        return None
    return ratio(target_sum, actual_sum, polarity)


def aggregate(records: List[PeriodRecord], polarity: Polarity, mode: AggregationMode) -> Optional[float]:
    """Year-to-date figure for a mode. average never returns None."""
    if mode == AggregationMode.AVERAGE:
        return average(records, polarity)
    if mode == AggregationMode.ACCUMULATED:
        k = last_measured_index(records)
        return accumulated(records, polarity, k) if k is not None else None
    return evolution(records, polarity)


def describe_method(mode: AggregationMode, polarity: Polarity) -> str:
    if mode == AggregationMode.ACCUMULATED:
        if polarity == Polarity.LOWER_IS_BETTER:
            return "Accumulated: sum of targets / sum of results x 100 (inverted, lower is better)"
        return "Accumulated: sum of results / sum of targets x 100"
    if mode == AggregationMode.AVERAGE:
        return "Average: arithmetic mean of the monthly attainments"
    return "Evolution: latest monthly attainment recorded"
