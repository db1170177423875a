"""Adapter for KPI sheets exported as a values grid (header row first), the way
the Sheets values API returns them. Fetching is the caller's job; this module
only turns rows into IndicatorSeries.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence
import logging
import math
import re
import unicodedata

from kpiengine.attainment.aggregator import AggregationMode
from kpiengine.attainment.engine import IndicatorSeries
from kpiengine.attainment.ratio import Polarity

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


@dataclass(frozen=True)
class SheetColumns:
    competency: int = 18
    team: int = 1
    indicator: int = 3
    target: int = 4
    actual: int = 5
    access_level: int = 7
    polarity: int = 15
    mode: int = 29
    situation: Optional[int] = None  # ATIVO/INATIVO column, when the sheet has one


RESTRICTED_ACCESS = "GESTORES"
INACTIVE = "INATIVO"

POLARITY_LABELS = {
    "MAIOR, MELHOR": Polarity.HIGHER_IS_BETTER,
    "MENOR, MELHOR": Polarity.LOWER_IS_BETTER,
}

MODE_LABELS = {
    "EVOLUCAO": AggregationMode.EVOLUTION,
    "MEDIA NO ANO": AggregationMode.AVERAGE,
    "ACUMULADO NO ANO": AggregationMode.ACCUMULATED,
}


def _strip_accents(s: str) -> str:
    return "".join(c for c in unicodedata.normalize("NFKD", s) if not unicodedata.combining(c))


def _clean_number(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return float(value)
        except OverflowError:
            return None
    s = str(value).strip()
    if not s:
        return None
    # pt-BR: "R$ 1.234,56" -> "1234.56"
    s = re.sub(r"R\$\s*", "", s, flags=re.IGNORECASE).replace(".", "").replace(",", ".", 1).strip()
    # leading number only, so "85,50%" and "12 un" still read
    m = _LEADING_NUMBER.match(s)
    if not m:
        return None
    n = float(m.group(0))
    return n if math.isfinite(n) else None


def parse_number(value: Any) -> float:
    """Sheet number for a required field; blank or garbage reads as 0."""
    n = _clean_number(value)
    return 0.0 if n is None or n != n else n


def parse_result(value: Any) -> Optional[float]:
    """Sheet number for the result column; blank or garbage means not measured."""
    n = _clean_number(value)
    return None if n is None or n != n else n


def parse_polarity_label(label: Any) -> Polarity:
    key = re.sub(r"\s*,\s*", ", ", str(label or "").strip().upper())
    if key in POLARITY_LABELS:
        return POLARITY_LABELS[key]
    if "MENOR" in key:
        return Polarity.LOWER_IS_BETTER
    if not key or "MAIOR" in key:
        return Polarity.HIGHER_IS_BETTER
    raise ValueError(f"unknown trend label: {label!r}")


def parse_mode_label(label: Any) -> AggregationMode:
    key = _strip_accents(str(label or "").strip().upper())
    if not key:
        return AggregationMode.EVOLUTION
    if key in MODE_LABELS:
        return MODE_LABELS[key]
    raise ValueError(f"unknown aggregation label: {label!r}")


def _raw(row: Sequence[Any], idx: Optional[int]) -> Any:
    if idx is None or idx >= len(row):
        return None
    return row[idx]


def _cell(row: Sequence[Any], idx: Optional[int]) -> str:
    if idx is None or idx >= len(row) or row[idx] is None:
        return ""
    return str(row[idx]).strip()


def series_from_sheet_rows(
    values: List[List[Any]],
    columns: SheetColumns | None = None,
    team: Optional[str] = None,
) -> Dict[str, IndicatorSeries]:
    """Group sheet rows into one IndicatorSeries per indicator name.

    - The first row is the header and is skipped; a grid without data rows
      is a contract error (ValueError)
    - Rows restricted to the GESTORES access level are dropped
    - Rows missing team, indicator or competency are dropped
    - Polarity and mode are taken from the first row of each indicator
    """
    if not values or len(values) < 2:
        raise ValueError("KPI sheet is empty")
    cols = columns or SheetColumns()

    grouped: Dict[str, List[List[Any]]] = {}
    skipped = 0
    for row in values[1:]:
        if _cell(row, cols.access_level).upper() == RESTRICTED_ACCESS:
            continue
        row_team, name, comp = _cell(row, cols.team), _cell(row, cols.indicator), _cell(row, cols.competency)
        if not (row_team and name and comp):
            skipped += 1
            continue
        if team is not None and row_team != team:
            continue
        grouped.setdefault(name, []).append(row)
    if skipped:
        logger.info("Skipped %d sheet rows without team/indicator/competency", skipped)

    out: Dict[str, IndicatorSeries] = {}
    for name, rows in grouped.items():
        first = rows[0]
        periods = tuple(
            {
                "competency": _cell(r, cols.competency),
                "target": parse_number(_raw(r, cols.target)),
                "actual": parse_result(_raw(r, cols.actual)),
                "active": _strip_accents(_cell(r, cols.situation).upper()) != INACTIVE,
            }
            for r in rows
        )
        out[name] = IndicatorSeries(
            polarity=parse_polarity_label(_cell(first, cols.polarity)),
            mode=parse_mode_label(_cell(first, cols.mode)),
            periods=periods,
            name=name,
        )
    return out
