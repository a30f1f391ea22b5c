"""Candidate GCDs of the set of integers an automaton accepts.

The GCD of the accepted set divides every accepted value, in particular the
value of the shortest accepted word with a nonzero digit. Its divisors are
therefore a complete list of candidates; confirming which one is the GCD is
left to the prover.
"""

from collections import deque
from typing import Dict, List, Optional, Tuple

from autbasis.automaton.dfa import Automaton, Word


def smallest_nonzero_accepted_word(automaton: Automaton) -> Optional[Word]:
    """Find a shortest accepted word that represents a nonzero value.

    Breadth-first search starts from the states reached by a nonzero first
    symbol, so every path found carries a significant digit.

    Returns:
        The word, or None if no accepted word has a nonzero value.
    """
    initial = automaton.initial_state
    # state -> (previous state, symbol read)
    parent: Dict[int, Tuple[int, int]] = {}
    queue = deque()

    for symbol in range(1, automaton.alphabet_size):
        target = automaton.step(initial, symbol)
        if target not in parent:
            parent[target] = (initial, symbol)
            queue.append(target)

    end_state = -1
    while queue:
        current = queue.popleft()
        if current in automaton.accepting:
            end_state = current
            break
        for symbol, target in enumerate(automaton.successors(current)):
            if target not in parent:
                parent[target] = (current, symbol)
                queue.append(target)

    if end_state < 0:
        return None

    # Walk back until the initial state, but never before a nonzero symbol
    symbols: List[int] = []
    nonzero = False
    current = end_state
    while not symbols or current != initial or not nonzero:
        current, symbol = parent[current]
        symbols.append(symbol)
        nonzero = nonzero or symbol != 0
    symbols.reverse()
    return tuple(symbols)


def divisors(value: int) -> List[int]:
    """All positive divisors of ``value`` in descending order."""
    if value <= 0:
        raise ValueError(f"divisors need a positive value, got {value}")
    result = []
    i = 1
    while i * i <= value:
        if value % i == 0:
            result.append(i)
            if value // i != i:
                result.append(value // i)
        i += 1
    return sorted(result, reverse=True)


def candidate_gcds(automaton: Automaton) -> Optional[List[int]]:
    """Divisors of the smallest nonzero accepted value, largest first.

    Returns:
        The candidates, or None when the automaton accepts no nonzero value.
    """
    word = smallest_nonzero_accepted_word(automaton)
    if not word:
        return None
    return divisors(automaton.value(word))
