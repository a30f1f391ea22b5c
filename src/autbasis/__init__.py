"""
autbasis - growth and GCD analysis of automatic sets of integers.

Automata read the most-significant-digit-first numerals of non-negative
integers. This library decides whether the accepted set grows polynomially
or exponentially, narrows its GCD to a short list of candidates, and
confirms GCDs and additive basis orders through an external prover.

Example usage:
    >>> from autbasis import Automaton, classify_growth
    >>> aut = Automaton.from_encoding(2, "0111", "1")
    >>> classify_growth(aut).is_polynomial
    False
"""

from autbasis.automaton.dfa import Automaton
from autbasis.automaton.growth import GrowthClassifier, classify_growth, is_polynomial
from autbasis.automaton.gcd import candidate_gcds
from autbasis.automaton.heuristics import heuristic_gcd, heuristic_is_polynomial
from autbasis.checker import AdditiveBasisChecker, check_automaton, check_encoding
from autbasis.config import Config
from autbasis.diagnostics.growth import Growth, GrowthType
from autbasis.diagnostics.report import AnalysisReport, Summary
from autbasis.prover.oracle import Oracle
from autbasis.prover.walnut import WalnutOracle
from autbasis.exceptions import (
    AutbasisError,
    InconsistentResultError,
    MalformedAutomatonError,
    OracleError,
)

__version__ = "0.1.0"

__all__ = [
    # Main API
    "Automaton",
    "AdditiveBasisChecker",
    "check_automaton",
    "check_encoding",
    "GrowthClassifier",
    "classify_growth",
    "is_polynomial",
    "candidate_gcds",
    "heuristic_gcd",
    "heuristic_is_polynomial",
    # Configuration
    "Config",
    # Diagnostics
    "Growth",
    "GrowthType",
    "AnalysisReport",
    "Summary",
    # Prover
    "Oracle",
    "WalnutOracle",
    # Exceptions
    "AutbasisError",
    "InconsistentResultError",
    "MalformedAutomatonError",
    "OracleError",
    # Version
    "__version__",
]
