"""
kpi/marketing.py

Marketing funnel KPI formula implementation.

Expected inputs
---------------
clicks : int
    Summed ad clicks for the group.
cost : float
    Summed ad spend for the group.
leads : int
    Attributed CRM records in ``lead`` stage.
opportunities : int
    Raw opportunity tally (``opportunity`` and ``closed_lost`` stages).
closed_won : int
    Attributed CRM records in ``closed_won`` stage.
revenue : float
    Summed amount of ``closed_won`` records.

Formulas
--------
CPC             = cost / clicks
CPA             = cost / leads
CVR lead->opp   = (opportunities + closed_won) / leads
CVR opp->won    = closed_won / (opportunities + closed_won)
ROAS            = revenue / cost

Every ratio goes through :func:`safe_divide`, so a zero denominator yields
``0.0`` rather than an error.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from kpi.base import BaseKPIFormula

_PRECISION = Decimal("0.001")


def safe_divide(numerator: float, denominator: float) -> float:
    """
    Divide and round to three decimals, half away from zero.

    Returns ``0.0`` when *denominator* is zero or the quotient is not finite.
    """

    if denominator == 0:
        return 0.0
    quotient = numerator / denominator
    if not math.isfinite(quotient):
        return 0.0
    return float(Decimal(repr(quotient)).quantize(_PRECISION, rounding=ROUND_HALF_UP))


class MarketingKPIFormula(BaseKPIFormula):
    """
    Deterministic marketing ratio calculations.
    """

    def calculate(self, inputs: dict[str, Any]) -> dict[str, float]:
        """
        Compute CPC, CPA, funnel conversion rates and ROAS from *inputs*.

        Parameters
        ----------
        inputs:
            Dictionary containing the keys listed in the module docstring.
            Missing keys count as zero.

        Returns
        -------
        dict
            Keys: ``cpc``, ``cpa``, ``cvr_lead_to_opp``, ``cvr_opp_to_won``,
            ``roas``.
        """

        clicks = inputs.get("clicks", 0)
        cost = inputs.get("cost", 0.0)
        leads = inputs.get("leads", 0)
        opportunities = inputs.get("opportunities", 0)
        closed_won = inputs.get("closed_won", 0)
        revenue = inputs.get("revenue", 0.0)

        reached_opportunity = opportunities + closed_won
        return {
            "cpc": safe_divide(cost, clicks),
            "cpa": safe_divide(cost, leads),
            "cvr_lead_to_opp": safe_divide(reached_opportunity, leads),
            "cvr_opp_to_won": safe_divide(closed_won, reached_opportunity),
            "roas": safe_divide(revenue, cost),
        }
