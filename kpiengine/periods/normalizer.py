from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging
import math
import re

logger = logging.getLogger(__name__)

_DAY_MONTH_YEAR = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_MONTH_YEAR = re.compile(r"^(\d{1,2})/(\d{4})$")


@dataclass(frozen=True)
class PeriodRecord:
    competency: str  # label as received, e.g. "01/03/2024" or "03/2024"
    month: int
    year: int
    target: float
    actual: Optional[float] = None  # None = not measured yet
    active: bool = True

    @property
    def sort_key(self) -> int:
        return competency_key(self.month, self.year)

    @property
    def measured(self) -> bool:
        return self.actual is not None


@dataclass(frozen=True)
class InvalidRecord:
    index: int  # position in the raw input
    competency: Optional[str]
    reason: str


@dataclass(frozen=True)
class NormalizedPeriods:
    records: List[PeriodRecord]
    invalid: List[InvalidRecord]


def competency_key(month: int, year: int) -> int:
    return year * 100 + month


def parse_competency(label: Any) -> Optional[Tuple[int, int]]:
    """Extract (month, year) from "DD/MM/YYYY" or "MM/YYYY".

    Returns None for anything else, including out-of-range months/days.
    """
    if not isinstance(label, str):
        return None
    s = label.strip()
    m = _DAY_MONTH_YEAR.match(s)
    if m:
        day, month, year = int(m.group(1)), int(m.group(2)), int(m.group(3))
        if not 1 <= day <= 31:
            return None
    else:
        m = _MONTH_YEAR.match(s)
        if not m:
            return None
        month, year = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12:
        return None
    return month, year


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _to_float(v: Any) -> Optional[float]:
    try:
        return float(v)
    except OverflowError:
        return None  # int beyond float range


def _validate(raw: Dict[str, Any]) -> Tuple[Optional[PeriodRecord], Optional[str]]:
    label = raw.get("competency")
    parsed = parse_competency(label)
    if parsed is None:
        return None, f"bad_competency: {label!r} is not DD/MM/YYYY or MM/YYYY"

    target = raw.get("target")
    if not _is_number(target):
        return None, f"bad_target: {target!r}"
    target = _to_float(target)
    if target is None or not math.isfinite(target):
        return None, "bad_target: out of range"

    actual = raw.get("actual")
    if actual is not None:
        if not _is_number(actual):
            return None, f"bad_actual: {actual!r}"
        actual = _to_float(actual)
        if actual is None or math.isinf(actual):
            return None, "bad_actual: out of range"
        if math.isnan(actual):
            actual = None

    active = raw.get("active", True)
    if not isinstance(active, bool):
        return None, f"bad_active: {active!r}"

    month, year = parsed
    return PeriodRecord(
        competency=label.strip(),
        month=month,
        year=year,
        target=target,
        actual=actual,
        active=active,
    ), None


def normalize_periods(periods: Iterable[Any]) -> NormalizedPeriods:
    """Validate raw period mappings and order the valid ones chronologically.

    - Each item needs: competency (str), target (finite number); optional
      actual (number or None) and active (bool, default True)
    - Invalid items are set aside with a reason, never sorted to the front
    - A second item for an already seen month/year is rejected as duplicate
    """
    records: List[PeriodRecord] = []
    invalid: List[InvalidRecord] = []
    seen: set[int] = set()

    for idx, raw in enumerate(periods):
        if not isinstance(raw, dict):
            invalid.append(InvalidRecord(idx, None, "bad_record: not a mapping"))
            continue
        rec, reason = _validate(raw)
        if rec is None:
            label = raw.get("competency")
            invalid.append(InvalidRecord(idx, label if isinstance(label, str) else None, reason or "invalid"))
            continue
        if rec.sort_key in seen:
            invalid.append(InvalidRecord(idx, rec.competency, f"duplicate_competency: {rec.month:02d}/{rec.year}"))
            continue
        seen.add(rec.sort_key)
        records.append(rec)

    for bad in invalid:
        logger.warning("Rejected period #%d (%s): %s", bad.index, bad.competency, bad.reason)

    records.sort(key=lambda r: r.sort_key)
    return NormalizedPeriods(records=records, invalid=invalid)
