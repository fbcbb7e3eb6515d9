"""
Value Potential Calculator
legal_value_score/scoring/value_potential.py

Maps each normalized category score independently through its bucket table
and sums the midpoints:

    ValuePotential.total = Σ table[c].amount_for(breakdown[c])
"""

from dataclasses import dataclass
from typing import Dict, Mapping

from legal_value_score.scoring.variants import ValueBucketTable


@dataclass(frozen=True)
class ValuePotential:
    """Monetary estimate per category (keyed by bucket key) plus total."""
    amounts: Dict[str, int]
    total: int

    def as_dict(self) -> Dict[str, int]:
        return {**self.amounts, "total": self.total}


class ValuePotentialCalculator:
    """Stepped lookup from category scores to monetary midpoints."""

    def __init__(self, tables: Mapping[str, ValueBucketTable]):
        self.tables = tables

    def calculate(self, breakdown: Mapping[str, int]) -> ValuePotential:
        """
        Args:
            breakdown: normalized category → score (0-25).
                       A category absent from the breakdown is treated as 0.

        Returns:
            ValuePotential keyed by each table's short key.
        """
        amounts = {
            table.key: table.amount_for(breakdown.get(category, 0))
            for category, table in self.tables.items()
        }
        return ValuePotential(amounts=amounts, total=sum(amounts.values()))
