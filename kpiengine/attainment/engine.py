from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple
import logging

from kpiengine.attainment.aggregator import AggregationMode, average
from kpiengine.attainment.projector import project
from kpiengine.attainment.ratio import Polarity, per_period_ratios
from kpiengine.attainment.status import Status, best_period, classify
from kpiengine.config.env import StatusThresholds
from kpiengine.periods.inactivation import split_inactive
from kpiengine.periods.normalizer import InvalidRecord, normalize_periods

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndicatorSeries:
    polarity: Polarity
    mode: AggregationMode
    periods: Tuple[Mapping[str, Any], ...]  # raw {competency, target, actual, active}
    name: Optional[str] = None


@dataclass(frozen=True)
class AttainmentResult:
    per_period: Dict[str, Optional[float]]
    partial: Optional[float]
    annual: Optional[float]
    year_headline_value: float
    average_attainment: float
    first_inactive_competency: Optional[str] = None
    invalid_records: List[InvalidRecord] = field(default_factory=list)
    best_competency: Optional[str] = None
    best_value: Optional[float] = None
    status: Optional[Status] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "perPeriod": dict(self.per_period),
            "partial": self.partial,
            "annual": self.annual,
            "yearHeadlineValue": self.year_headline_value,
            "averageAttainment": self.average_attainment,
            "firstInactiveCompetency": self.first_inactive_competency,
            "invalidRecords": [
                {"index": r.index, "competency": r.competency, "reason": r.reason}
                for r in self.invalid_records
            ],
            "bestCompetency": self.best_competency,
            "bestValue": self.best_value,
            "status": self.status.value if self.status else None,
        }


def series_from_payload(payload: Mapping[str, Any], name: Optional[str] = None) -> IndicatorSeries:
    """Build a series from the wire shape {trendPolarity, aggregationMode, periods}.

    Unknown polarity/mode strings and a non-list periods field break the call
    contract and raise ValueError; bad individual periods do not.
    """
    if not isinstance(payload, Mapping):
        raise ValueError("series must be an object")
    try:
        polarity = Polarity(payload.get("trendPolarity"))
    except ValueError:
        raise ValueError(f"unknown trendPolarity: {payload.get('trendPolarity')!r}") from None
    try:
        mode = AggregationMode(payload.get("aggregationMode"))
    except ValueError:
        raise ValueError(f"unknown aggregationMode: {payload.get('aggregationMode')!r}") from None
    periods = payload.get("periods")
    if not isinstance(periods, list):
        raise ValueError("periods must be a list")
    return IndicatorSeries(polarity=polarity, mode=mode, periods=tuple(periods), name=name or payload.get("name"))


def compute_attainment(series: IndicatorSeries, thresholds: StatusThresholds | None = None) -> AttainmentResult:
    """Run one series through normalize -> inactivation split -> ratios -> projection.

    Pure: the same series always gives an equal result.
    """
    normalized = normalize_periods(series.periods)
    split = split_inactive(normalized.records)
    active = split.active

    active_ratios = per_period_ratios(active, series.polarity)
    # inactive periods stay listed, chronologically, but never get a ratio
    per_period = {r.competency: active_ratios.get(r.competency) for r in normalized.records}

    projection = project(active, series.polarity, series.mode)
    best = best_period(active, series.polarity)

    logger.debug(
        "%s: %d periods (%d inactive, %d invalid), partial=%s annual=%s",
        series.name or "<series>", len(normalized.records), len(split.inactive),
        len(normalized.invalid), projection.partial, projection.annual,
    )

    return AttainmentResult(
        per_period=per_period,
        partial=projection.partial,
        annual=projection.annual,
        year_headline_value=projection.year_headline_value,
        average_attainment=average(active, series.polarity),
        first_inactive_competency=split.first_inactive_competency,
        invalid_records=list(normalized.invalid),
        best_competency=best.competency if best else None,
        best_value=best.actual if best else None,
        status=classify(projection.partial, thresholds),
    )
