"""Oracle contract and the confirmation loops built on it."""

import logging
import math
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from autbasis.automaton.dfa import Automaton
from autbasis.prover.queries import Query, additive_basis_query, gcd_query


logger = logging.getLogger(__name__)


class Oracle(ABC):
    """Answers first-order queries about an automaton.

    Implementations are treated as pure boolean functions: a query is
    asked once and the answer is final.
    """

    @abstractmethod
    def holds(self, automaton: Automaton, query: Query) -> bool:
        """Return whether ``query`` is true for ``automaton``."""

    def close(self) -> None:
        """Release any resources held by the oracle."""

    def __enter__(self) -> "Oracle":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def resolve_gcd(automaton: Automaton, oracle: Oracle, candidates: Iterable[int]) -> int:
    """Return the first candidate dividing every accepted value.

    Candidates are tried in the given order, which should be descending so
    that the first confirmed divisor is the GCD.

    Returns:
        The confirmed candidate, or 0 if none is confirmed.
    """
    for candidate in candidates:
        query = gcd_query(automaton, candidate)
        logger.info("Checking GCD %d for %s", candidate, automaton.canonical_string)
        if oracle.holds(automaton, query):
            return candidate
    return 0


def additive_basis_order(
    automaton: Automaton,
    oracle: Oracle,
    asymptotic: bool = True,
    max_order: Optional[int] = None,
) -> float:
    """Smallest number of summands that suffices, counting up from one.

    Returns:
        The order, or ``math.inf`` once ``max_order`` summands have failed.
    """
    summands = 1
    while True:
        query = additive_basis_query(automaton, summands, asymptotic)
        logger.info(
            "Checking %s order %d for %s",
            "asymptotic" if asymptotic else "plain",
            summands,
            automaton.canonical_string,
        )
        if oracle.holds(automaton, query):
            return summands
        logger.info("%d summands is not enough for %s", summands, automaton.canonical_string)
        if max_order is not None and summands >= max_order:
            return math.inf
        summands += 1
