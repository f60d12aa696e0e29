"""
kpi/attribution.py

Stage classification for attributed CRM records.
"""

from __future__ import annotations

from dataclasses import dataclass

STAGE_LEAD = "lead"
STAGE_OPPORTUNITY = "opportunity"
STAGE_CLOSED_WON = "closed_won"
STAGE_CLOSED_LOST = "closed_lost"


@dataclass
class StageTally:
    """
    Running per-group counts of attributed CRM records.

    ``opportunities`` is the raw tally; :attr:`reached_opportunity` adds the
    won records on top of it.
    """

    leads: int = 0
    opportunities: int = 0
    closed_won: int = 0
    revenue: float = 0.0

    @property
    def reached_opportunity(self) -> int:
        return self.opportunities + self.closed_won


def apply_stage(tally: StageTally, stage: str, amount: float) -> None:
    """
    Count one CRM record of *stage* into *tally*.

    ``closed_lost`` is counted as an opportunity that did not convert.
    Stages outside the known set are ignored.
    """

    if stage == STAGE_LEAD:
        tally.leads += 1
    elif stage in (STAGE_OPPORTUNITY, STAGE_CLOSED_LOST):
        tally.opportunities += 1
    elif stage == STAGE_CLOSED_WON:
        tally.closed_won += 1
        tally.revenue += amount
