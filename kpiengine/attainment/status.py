from __future__ import annotations
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from kpiengine.attainment.ratio import Polarity
from kpiengine.config.env import StatusThresholds
from kpiengine.periods.normalizer import PeriodRecord


class Status(str, Enum):
    ON_TARGET = "on-target"
    ATTENTION = "attention"
    CRITICAL = "critical"


def classify(percent: Optional[float], thresholds: StatusThresholds | None = None) -> Optional[Status]:
    if percent is None:
        return None
    t = thresholds or StatusThresholds()
    if percent >= t.on_target:
        return Status.ON_TARGET
    if percent >= t.attention:
        return Status.ATTENTION
    return Status.CRITICAL


def best_period(records: List[PeriodRecord], polarity: Polarity) -> Optional[PeriodRecord]:
    """Measured record with the best actual for the polarity; earliest wins ties."""
    best: Optional[PeriodRecord] = None
    for r in records:
        if r.actual is None:
            continue
        if best is None:
            best = r
        elif polarity == Polarity.LOWER_IS_BETTER and r.actual < best.actual:
            best = r
        elif polarity != Polarity.LOWER_IS_BETTER and r.actual > best.actual:
            best = r
    return best


def needs_attention(
    partials: Iterable[Tuple[str, Optional[float]]],
    thresholds: StatusThresholds | None = None,
) -> List[str]:
    """Names whose partial attainment is below the attention threshold, worst first."""
    t = thresholds or StatusThresholds()
    flagged = [(name, pct) for name, pct in partials if pct is not None and pct < t.attention]
    flagged.sort(key=lambda x: (x[1], x[0]))
    return [name for name, _ in flagged]
