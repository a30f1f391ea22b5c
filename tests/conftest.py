"""Shared fixtures: sample automata and a brute-force oracle."""

import math
from typing import List

import pytest

from autbasis.automaton.dfa import Automaton
from autbasis.prover.oracle import Oracle
from autbasis.prover.queries import GCD, ORDER, Query


# name -> (state count, transitions, accepts)
SAMPLES = {
    # 0*1(0|1)*: every positive integer
    "positive": (2, "0111", "1"),
    # 0*10*: powers of two
    "powers_of_two": (3, "011222", "1"),
    # numerals ending in 0: even numbers (and zero)
    "even": (2, "0101", "0"),
    # numerals ending in 1: odd numbers
    "odd": (2, "0101", "1"),
    # remainder mod 3: multiples of three
    "multiples_of_three": (3, "012012", "0"),
    # 0*110*: three times a power of two
    "three_powers_of_two": (4, "01322333", "2"),
    # accepts the empty word only, everything else falls into a sink
    "empty_word_only": (2, "1111", "0"),
}


def sample(name: str) -> Automaton:
    return Automaton.from_encoding(*SAMPLES[name])


def accepted_values(automaton: Automaton, bound: int) -> List[int]:
    """Accepted values ``0 <= n < bound`` by brute force."""
    return [n for n in range(bound) if automaton.accepts_value(n)]


class BruteForceOracle(Oracle):
    """Answers queries by checking every value below ``bound``.

    Asymptotic order queries only look at the upper half of the range.
    """

    def __init__(self, bound: int = 256):
        self.bound = bound
        self.queries: List[Query] = []

    def holds(self, automaton: Automaton, query: Query) -> bool:
        self.queries.append(query)
        values = accepted_values(automaton, self.bound)
        if query.kind == GCD:
            return all(value % query.argument == 0 for value in values)
        if query.kind == ORDER:
            sums = {0}
            for _ in range(query.argument):
                sums = {s + v for s in sums for v in values + [0] if s + v < self.bound}
            start = self.bound // 2 if query.asymptotic else 0
            return all(n in sums for n in range(start, self.bound))
        raise AssertionError(f"unknown query kind {query.kind}")


class ConstantOracle(Oracle):
    """Gives the same answer to every query."""

    def __init__(self, answer: bool):
        self.answer = answer
        self.queries: List[Query] = []

    def holds(self, automaton: Automaton, query: Query) -> bool:
        self.queries.append(query)
        return self.answer


def brute_force_gcd(automaton: Automaton, bound: int) -> int:
    result = 0
    for value in accepted_values(automaton, bound):
        result = math.gcd(result, value)
    return result


@pytest.fixture
def oracle() -> BruteForceOracle:
    return BruteForceOracle()
