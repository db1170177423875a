from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import math

from kpiengine.attainment.aggregator import AggregationMode, accumulated, last_measured_index
from kpiengine.attainment.ratio import Polarity, ratio
from kpiengine.periods.normalizer import PeriodRecord


@dataclass(frozen=True)
class Projection:
    partial: Optional[float]  # to date: through the last measured period k
    annual: Optional[float]   # actual so far against the full-year target
    year_headline_value: float
    last_measured_index: Optional[int] = None


def headline_value(records: List[PeriodRecord], mode: AggregationMode, k: int) -> float:
    if mode == AggregationMode.EVOLUTION:
        return float(records[k].actual)
    measured = [r.actual for r in records[: k + 1] if r.actual is not None]
    if mode == AggregationMode.AVERAGE:
        value = sum(a / len(measured) for a in measured)
    else:
        value = float(sum(measured))
    # a sum past the float range has no meaningful headline
    return value if math.isfinite(value) else 0.0


def project(records: List[PeriodRecord], polarity: Polarity, mode: AggregationMode) -> Projection:
    """Partial and annual attainment plus the raw headline value of the year.

    Inputs are the chronologically ordered active records. With k the last
    measured index and n the last index:
    - evolution/average: partial = ratio(target[k], actual[k]),
      annual = ratio(target[n], actual[k])
    - accumulated: partial sums both sides over [0..k]; annual sums actuals
      over [0..k] and targets over [0..n]
    The headline never projects: evolution -> actual[k], average -> mean of
    measured actuals, accumulated -> sum of actuals over [0..k].
    """
    k = last_measured_index(records)
    if k is None:
        return Projection(partial=None, annual=None, year_headline_value=0.0)

    n = len(records) - 1
    if mode == AggregationMode.ACCUMULATED:
        partial = accumulated(records, polarity, k)
        annual = accumulated(records, polarity, k, target_end=n)
    else:
        current = records[k].actual
        partial = ratio(records[k].target, current, polarity)
        annual = ratio(records[n].target, current, polarity)

    return Projection(
        partial=partial,
        annual=annual,
        year_headline_value=headline_value(records, mode, k),
        last_measured_index=k,
    )
