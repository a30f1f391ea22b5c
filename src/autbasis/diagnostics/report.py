"""Per-automaton reports and the batch summary."""

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from autbasis.diagnostics.growth import Growth


def format_order(order: float, max_order: Optional[int] = None) -> str:
    """Render an additive basis order, ``inf`` meaning "more than the maximum"."""
    if math.isinf(order):
        if max_order is None:
            return "unbounded"
        return f"greater than {max_order}"
    return str(int(order))


@dataclass
class AnalysisReport:
    """Everything the checker learned about one automaton.

    Attributes:
        source: Canonical string of the automaton.
        growth: Exact growth verdict.
        heuristic_polynomial: Heuristic growth verdict, None if not run.
        candidates: GCD candidates, None when no nonzero value is accepted.
        gcd: GCD of the accepted values, None when undetermined.
        heuristic_gcd: Sampled GCD, None if not run.
        accepts_one: Whether the value 1 is accepted.
        asymptotic_order: Asymptotic additive basis order, if computed.
        order: Additive basis order, if computed.
    """

    source: str
    growth: Growth
    heuristic_polynomial: Optional[bool] = None
    candidates: Optional[List[int]] = None
    gcd: Optional[int] = None
    heuristic_gcd: Optional[int] = None
    accepts_one: bool = False
    asymptotic_order: Optional[float] = None
    order: Optional[float] = None

    @property
    def is_polynomial(self) -> bool:
        return self.growth.is_polynomial

    @property
    def gcd_determined(self) -> bool:
        return self.gcd is not None

    @property
    def has_unit_gcd(self) -> bool:
        return self.gcd == 1

    @property
    def gcd_agrees(self) -> Optional[bool]:
        """Whether the sampled GCD matches, None if either is missing."""
        if self.gcd is None or self.heuristic_gcd is None:
            return None
        return self.gcd == self.heuristic_gcd

    @property
    def is_additive_basis(self) -> bool:
        """Exponential growth, GCD 1 and 1 accepted."""
        return self.growth.is_exponential and self.has_unit_gcd and self.accepts_one

    def describe_orders(self, max_order: Optional[int] = None) -> List[str]:
        """Order lines printed under the automaton in batch output."""
        lines = []
        if self.asymptotic_order is not None:
            prefix = " forms an additive basis and" if self.accepts_one else ""
            lines.append(
                f"{prefix} has asymptotic additive basis order "
                f"{format_order(self.asymptotic_order, max_order)}"
            )
        if self.order is not None:
            lines.append(
                f" has additive basis order {format_order(self.order, max_order)}"
            )
        return lines


@dataclass
class Summary:
    """Counts over a batch of reports."""

    max_order: Optional[int] = None
    polynomial_unit_gcd: int = 0
    polynomial_other_gcd: int = 0
    exponential_unit_gcd: int = 0
    exponential_other_gcd: int = 0
    undetermined_gcd: int = 0
    additive_bases: int = 0
    asymptotic_orders: Dict[float, int] = field(default_factory=Counter)
    orders: Dict[float, int] = field(default_factory=Counter)

    @property
    def total(self) -> int:
        return (
            self.polynomial_unit_gcd
            + self.polynomial_other_gcd
            + self.exponential_unit_gcd
            + self.exponential_other_gcd
            + self.undetermined_gcd
        )

    def add(self, report: AnalysisReport) -> None:
        if not report.gcd_determined:
            self.undetermined_gcd += 1
        elif report.is_polynomial:
            if report.has_unit_gcd:
                self.polynomial_unit_gcd += 1
            else:
                self.polynomial_other_gcd += 1
        elif report.has_unit_gcd:
            self.exponential_unit_gcd += 1
        else:
            self.exponential_other_gcd += 1

        if report.is_additive_basis:
            self.additive_bases += 1
        if report.asymptotic_order is not None:
            self.asymptotic_orders[report.asymptotic_order] += 1
        if report.order is not None:
            self.orders[report.order] += 1

    def render(self) -> List[str]:
        lines = [
            f"Polynomial growth and GCD!=1: {self.polynomial_other_gcd}",
            f"Polynomial growth and GCD==1: {self.polynomial_unit_gcd}",
            f"Exponential growth and GCD!=1: {self.exponential_other_gcd}",
            f"Exponential growth and GCD==1: {self.exponential_unit_gcd}",
            f"Undetermined GCD: {self.undetermined_gcd}",
            f"Form additive basis: {self.additive_bases}",
        ]
        for order in sorted(self.asymptotic_orders):
            lines.append(
                f"{self.asymptotic_orders[order]} automata with asymptotic "
                f"additive basis order {format_order(order, self.max_order)}"
            )
        for order in sorted(self.orders):
            lines.append(
                f"{self.orders[order]} automata with additive basis order "
                f"{format_order(order, self.max_order)}"
            )
        return lines
