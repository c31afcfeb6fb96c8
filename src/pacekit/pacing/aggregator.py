"""
Spend aggregation: raw spend records -> date -> campaign -> summed spend.

The resulting ``SpendIndex`` is built once per run and is read-only after
that. Several records for the same (date, campaign) are summed, never
overwritten.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping

import pandas as pd

from .models import SpendRecord


@dataclass(frozen=True)
class SpendIndex:
    """Immutable ``date -> campaign -> spend`` lookup."""

    by_date: Mapping[date, Mapping[str, float]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def spend(self, day: date, campaign: str) -> float:
        """Spend for *campaign* on *day*; 0.0 when nothing was recorded."""
        return self.by_date.get(day, {}).get(campaign, 0.0)

    def dates(self) -> Iterator[date]:
        return iter(sorted(self.by_date))

    def __contains__(self, day: object) -> bool:
        return day in self.by_date

    def __len__(self) -> int:
        return len(self.by_date)

    @staticmethod
    def key(day: date) -> str:
        """Canonical ``YYYY-MM-DD`` key for *day*."""
        return day.isoformat()

    def to_frame(self) -> pd.DataFrame:
        """Long-format view: one row per (date, campaign) with the summed spend."""
        records = [
            {"date": d, "campaign": c, "spend": v}
            for d in self.dates()
            for c, v in self.by_date[d].items()
        ]
        return pd.DataFrame(records, columns=["date", "campaign", "spend"])


def aggregate(records: Iterable[SpendRecord]) -> SpendIndex:
    """Sum spend per (date, campaign) into a read-only ``SpendIndex``."""
    acc: Dict[date, Dict[str, float]] = defaultdict(lambda: defaultdict(float))
    for r in records:
        acc[r.date][r.campaign] += r.amount
    frozen = {d: MappingProxyType(dict(per_campaign)) for d, per_campaign in acc.items()}
    return SpendIndex(by_date=MappingProxyType(frozen))
