"""
kpi/base.py

Abstract base class for marketing KPI formula implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseKPIFormula(ABC):
    """
    Contract for KPI formula implementations.

    Subclasses receive a plain dictionary of aggregated counts and return
    a plain dictionary of derived ratios.

    No I/O, no logging, and no side effects are permitted inside
    :meth:`calculate`.
    """

    @abstractmethod
    def calculate(self, inputs: dict[str, Any]) -> dict[str, float]:
        """
        Compute KPI ratios from *inputs* and return a result dictionary.

        Parameters
        ----------
        inputs:
            Aggregated counts and amounts for one metrics group.

        Returns
        -------
        dict[str, float]
            Computed ratios keyed by metric name.
        """
