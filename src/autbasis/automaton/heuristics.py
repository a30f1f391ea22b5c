"""Heuristic cross-checks for the exact growth and GCD computations.

Neither function proves anything: they sample the automaton up to a
bound and are only meant to catch mistakes in the exact algorithms.
"""

import logging
import math
from typing import List, Optional

from autbasis.automaton.dfa import Automaton


logger = logging.getLogger(__name__)

Matrix = List[List[int]]


def _multiply(a: Matrix, b: Matrix) -> Matrix:
    size = len(b[0])
    inner = len(b)
    return [
        [sum(row[k] * b[k][j] for k in range(inner)) for j in range(size)]
        for row in a
    ]


def _powers_of_two(matrix: Matrix, max_length: int) -> List[Matrix]:
    """``matrix ** (2 ** k)`` for every bit ``k`` of ``max_length``."""
    powers = [matrix]
    for _ in range(1, max(1, max_length.bit_length())):
        powers.append(_multiply(powers[-1], powers[-1]))
    return powers


def count_accepted_words(
    automaton: Automaton, length: int, powers: Optional[List[Matrix]] = None
) -> int:
    """Number of accepted words of exactly ``length`` symbols.

    Words with leading zeros count separately, so this is the number of
    paths of that length from the initial state to an accepting state.

    Args:
        automaton: The automaton.
        length: The word length.
        powers: Precomputed powers of two of the counting matrix.
    """
    if length < 0:
        raise ValueError(f"word length must not be negative, got {length}")
    if powers is None or len(powers) < length.bit_length():
        powers = _powers_of_two(automaton.counting_matrix(), length)

    row = [0] * automaton.state_count
    row[automaton.initial_state] = 1
    vector = [row]
    bit = 0
    while length >> bit:
        if (length >> bit) & 1:
            vector = _multiply(vector, powers[bit])
        bit += 1
    return sum(vector[0][state] for state in automaton.accepting)


def _threshold(state_count: int, max_word_length: int) -> int:
    return 2 ** max(0, (max_word_length - state_count) // state_count)


def heuristic_word_length(automaton: Automaton, minimum: int) -> int:
    """Smallest word length from ``minimum`` up that separates the growth classes.

    A polynomial language on ``n`` states has at most ``k ** n`` chains of
    components, each contributing at most ``comb(L + n, n - 1)`` words of
    length ``L``. The length grows until that bound falls below the
    threshold used by :func:`heuristic_is_polynomial`.
    """
    n = automaton.state_count
    chains = automaton.alphabet_size ** n
    length = max(1, minimum)
    while chains * math.comb(length + n, n - 1) >= _threshold(n, length):
        length += n
    return length


def heuristic_is_polynomial(automaton: Automaton, max_word_length: int) -> bool:
    """Guess the growth class from the number of accepted words near a length.

    Counts accepted words for the ``state_count`` lengths just below
    ``max_word_length`` and calls the growth polynomial when the largest
    count stays under ``2 ** ((max_word_length - n) // n)``.
    """
    n = automaton.state_count
    powers = _powers_of_two(automaton.counting_matrix(), max_word_length)

    max_accepted = 0
    for length in range(max(0, max_word_length - n), max_word_length):
        max_accepted = max(max_accepted, count_accepted_words(automaton, length, powers))

    threshold = _threshold(n, max_word_length)
    logger.debug("Max accepted: %d, threshold: %d", max_accepted, threshold)
    return max_accepted < threshold


def heuristic_gcd(automaton: Automaton, certainty_bits: int) -> int:
    """GCD of the accepted values below ``2 ** certainty_bits``.

    Returns:
        The GCD, or 0 when no positive value in range is accepted.
    """
    result = 0
    if automaton.radix < 2:
        return result
    for value in range(1, 1 << certainty_bits):
        if automaton.accepts_value(value):
            result = math.gcd(result, value)
    logger.debug("Heuristic GCD below 2**%d: %d", certainty_bits, result)
    return result
