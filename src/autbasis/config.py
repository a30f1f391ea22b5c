"""Configuration for automaton analysis."""

from dataclasses import dataclass, field
from typing import List, Optional


DEFAULT_WALNUT_COMMAND = ["java", "-Xms8g", "-cp", "bin", "Main.prover"]


@dataclass
class Config:
    """Settings shared by the checker, the prover driver and the CLI.

    Attributes:
        heuristic_growth_word_length: Smallest word length for the
            matrix-power growth estimate. Larger automata get a longer one.
        heuristic_gcd_bits: Values below ``2 ** heuristic_gcd_bits`` are
            sampled by the heuristic GCD.
        cross_check: Run the heuristics next to the exact algorithms.
        strict_gcd: Raise instead of warning when the heuristic GCD differs.
        compute_order: Ask the prover for the asymptotic additive basis order.
        compute_plain_order: Also ask for the non-asymptotic order.
        max_order: Give up after this many summands (None means no limit).
        walnut_dir: Walnut installation directory.
        walnut_command: Command starting the prover, run inside ``walnut_dir``.
        keep_logs: Keep Walnut's ``*_log.txt`` files.
    """

    heuristic_growth_word_length: int = 62
    heuristic_gcd_bits: int = 10
    cross_check: bool = True
    strict_gcd: bool = False
    compute_order: bool = False
    compute_plain_order: bool = False
    max_order: Optional[int] = None
    walnut_dir: Optional[str] = None
    walnut_command: List[str] = field(
        default_factory=lambda: list(DEFAULT_WALNUT_COMMAND)
    )
    keep_logs: bool = False

    def __post_init__(self) -> None:
        if self.heuristic_growth_word_length < 1:
            raise ValueError("heuristic_growth_word_length must be positive")
        if self.heuristic_gcd_bits < 1:
            raise ValueError("heuristic_gcd_bits must be positive")
        if self.max_order is not None and self.max_order < 1:
            raise ValueError("max_order must be positive")

    @classmethod
    def default(cls) -> "Config":
        """Word length and sample size used for full batch runs."""
        return cls()

    @classmethod
    def quick(cls) -> "Config":
        """Smaller heuristic bounds for interactive use and tests."""
        return cls(heuristic_growth_word_length=40, heuristic_gcd_bits=8)
