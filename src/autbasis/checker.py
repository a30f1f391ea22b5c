"""Additive basis checker combining the exact analyses with their cross-checks."""

import logging
from typing import List, Optional

from autbasis.automaton.dfa import Automaton, Encoding
from autbasis.automaton.gcd import candidate_gcds
from autbasis.automaton.growth import classify_growth
from autbasis.automaton.heuristics import (
    heuristic_gcd,
    heuristic_is_polynomial,
    heuristic_word_length,
)
from autbasis.config import Config
from autbasis.diagnostics.report import AnalysisReport
from autbasis.exceptions import InconsistentResultError
from autbasis.prover.oracle import Oracle, additive_basis_order, resolve_gcd


logger = logging.getLogger(__name__)


class AdditiveBasisChecker:
    """Classify growth and GCD of automatic sets, asking an oracle when needed.

    Growth is decided locally. The GCD is decided locally only when the
    smallest nonzero accepted value is 1; otherwise the oracle confirms one
    of the candidates. Without an oracle such a GCD stays undetermined.
    """

    def __init__(self, config: Config = None, oracle: Optional[Oracle] = None):
        self.config = config or Config.default()
        self.oracle = oracle

    def check(self, automaton: Automaton) -> AnalysisReport:
        """Analyze one automaton.

        Raises:
            InconsistentResultError: If the heuristic growth estimate
                disagrees with the exact classification, or the sampled GCD
                disagrees and ``strict_gcd`` is set.
        """
        source = automaton.canonical_string
        report = AnalysisReport(source=source, growth=classify_growth(automaton))
        logger.debug("%s has %s growth", source, report.growth)

        if self.config.cross_check:
            length = heuristic_word_length(
                automaton, self.config.heuristic_growth_word_length
            )
            report.heuristic_polynomial = heuristic_is_polynomial(automaton, length)
            if report.heuristic_polynomial != report.is_polynomial:
                raise InconsistentResultError(
                    f"{source} has {report.growth.type} growth but the heuristic "
                    f"with word length {length} "
                    "says otherwise"
                )

        report.candidates = candidate_gcds(automaton)
        report.gcd = self._resolve_gcd(automaton, report.candidates)

        if self.config.cross_check:
            report.heuristic_gcd = heuristic_gcd(automaton, self.config.heuristic_gcd_bits)
            if report.gcd_agrees is False:
                message = (
                    f"{source}: GCD is {report.gcd} but the heuristic says "
                    f"{report.heuristic_gcd}"
                )
                if self.config.strict_gcd:
                    raise InconsistentResultError(message)
                logger.warning(message)

        report.accepts_one = automaton.radix >= 2 and automaton.accepts_value(1)

        if report.growth.is_exponential and report.has_unit_gcd:
            self._compute_orders(automaton, report)

        return report

    def _resolve_gcd(
        self, automaton: Automaton, candidates: Optional[List[int]]
    ) -> Optional[int]:
        if candidates is None:
            logger.info("%s accepts no nonzero value", automaton.canonical_string)
            return None
        if candidates == [1]:
            return 1
        if self.oracle is None:
            logger.info(
                "No prover configured, GCD of %s undetermined", automaton.canonical_string
            )
            return None
        gcd = resolve_gcd(automaton, self.oracle, candidates)
        return gcd or None

    def _compute_orders(self, automaton: Automaton, report: AnalysisReport) -> None:
        if not self.config.compute_order:
            return
        if self.oracle is None:
            logger.info("No prover configured, skipping additive basis order")
            return
        report.asymptotic_order = additive_basis_order(
            automaton, self.oracle, asymptotic=True, max_order=self.config.max_order
        )
        if self.config.compute_plain_order and report.accepts_one:
            report.order = additive_basis_order(
                automaton, self.oracle, asymptotic=False, max_order=self.config.max_order
            )


def check_automaton(
    automaton: Automaton, config: Config = None, oracle: Optional[Oracle] = None
) -> AnalysisReport:
    """Convenience function to analyze one automaton."""
    return AdditiveBasisChecker(config, oracle).check(automaton)


def check_encoding(
    state_count: int,
    transitions: Encoding,
    accepts: Encoding,
    config: Config = None,
    oracle: Optional[Oracle] = None,
) -> AnalysisReport:
    """Build an automaton from its ``(n, transitions, accepts)`` triple and analyze it."""
    automaton = Automaton.from_encoding(state_count, transitions, accepts)
    return check_automaton(automaton, config, oracle)
