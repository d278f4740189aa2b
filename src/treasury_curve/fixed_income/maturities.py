# src/treasury_curve/fixed_income/maturities.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from treasury_curve.fixed_income.validation import UnknownMaturityLabel


@dataclass(frozen=True)
class MaturityCatalog:
    """
    Ordered maturity labels and their year equivalents.

    The order is the column order of tabular rate releases: column i + 1 of a
    data row holds the yield for ``entries[i]``.
    """

    entries: Tuple[Tuple[str, float], ...]

    def __post_init__(self) -> None:
        labels = [label for label, _ in self.entries]
        if len(labels) != len(set(labels)):
            raise ValueError(f"Duplicate maturity labels: {labels}")
        for label, years in self.entries:
            if years <= 0:
                raise ValueError(f"Maturity for {label} must be positive: {years}")

    def maturity_years(self, label: str) -> float:
        for name, years in self.entries:
            if name == label:
                return years
        raise UnknownMaturityLabel(label)

    def canonical_order(self) -> Tuple[str, ...]:
        return tuple(label for label, _ in self.entries)

    def __len__(self) -> int:
        return len(self.entries)


# US Treasury constant-maturity series (H.15 release order)
TREASURY_CATALOG = MaturityCatalog(
    entries=(
        ("1MO", 1.0 / 12.0),
        ("3MO", 0.25),
        ("6MO", 0.5),
        ("1Y", 1.0),
        ("2Y", 2.0),
        ("3Y", 3.0),
        ("5Y", 5.0),
        ("7Y", 7.0),
        ("10Y", 10.0),
        ("20Y", 20.0),
        ("30Y", 30.0),
    )
)
