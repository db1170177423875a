from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from kpiengine.periods.normalizer import PeriodRecord


@dataclass(frozen=True)
class ActivitySplit:
    active: List[PeriodRecord]
    inactive: List[PeriodRecord]
    first_inactive_competency: Optional[str] = None


def split_inactive(records: List[PeriodRecord]) -> ActivitySplit:
    """Partition records into active/inactive, keeping their order.

    Inactive periods take no part in any ratio, sum or horizon; they are kept
    only so callers can show "inactive from <competency>". A period may be
    reactivated later, so the earliest inactive one is searched, not assumed.
    """
    active = [r for r in records if r.active]
    inactive = [r for r in records if not r.active]
    first = min(inactive, key=lambda r: r.sort_key).competency if inactive else None
    return ActivitySplit(active=active, inactive=inactive, first_inactive_competency=first)
