"""Cycling words and their primitive roots."""

from collections import deque
from typing import Dict, List, Optional, Sequence, Tuple, TypeVar

from autbasis.automaton.dfa import Automaton, Word


W = TypeVar("W", str, Tuple[int, ...])


def find_cycling_word(
    automaton: Automaton, state: int, components: List[int]
) -> Optional[Word]:
    """Find a shortest word leading from ``state`` back to itself.

    The search never leaves the component of ``state``, so the returned
    word is a cycle inside that component.

    Args:
        automaton: The automaton to search.
        state: The state the cycle starts and ends at.
        components: Component id of every state.

    Returns:
        The cycling word, or None when the component of ``state`` is trivial.
    """
    target_component = components[state]
    # state -> (previous state, symbol read)
    parent: Dict[int, Tuple[int, int]] = {}
    queue = deque([state])

    while queue:
        current = queue.popleft()
        for symbol, target in enumerate(automaton.successors(current)):
            if components[target] != target_component:
                continue
            if target == state:
                return _build_word(state, current, symbol, parent)
            if target not in parent:
                parent[target] = (current, symbol)
                queue.append(target)

    return None


def _build_word(
    state: int, last: int, symbol: int, parent: Dict[int, Tuple[int, int]]
) -> Word:
    symbols = [symbol]
    current = last
    while current != state:
        current, previous_symbol = parent[current]
        symbols.append(previous_symbol)
    symbols.reverse()
    return tuple(symbols)


def _failure_function(pattern: Sequence) -> List[int]:
    """Length of the longest proper border of every prefix of ``pattern``."""
    failure = [0] * len(pattern)
    length = 0
    for i in range(1, len(pattern)):
        while length > 0 and pattern[i] != pattern[length]:
            length = failure[length - 1]
        if pattern[i] == pattern[length]:
            length += 1
        failure[i] = length
    return failure


def _first_occurrence(text: Sequence, pattern: Sequence) -> int:
    """Offset of the first occurrence of ``pattern`` in ``text`` (KMP), or -1."""
    failure = _failure_function(pattern)
    matched = 0
    for i, item in enumerate(text):
        while matched > 0 and item != pattern[matched]:
            matched = failure[matched - 1]
        if item == pattern[matched]:
            matched += 1
        if matched == len(pattern):
            return i - len(pattern) + 1
    return -1


def primitive_root(word: W) -> W:
    """Return the shortest ``r`` such that ``word`` is a power of ``r``.

    ``word`` occurs in ``word[1:] + word``; the offset of its first
    occurrence plus one is the length of the primitive root.

    Raises:
        ValueError: If ``word`` is empty.
    """
    if len(word) == 0:
        raise ValueError("the empty word has no primitive root")
    offset = _first_occurrence(word[1:] + word, word)
    return word[: offset + 1]


def is_primitive(word: W) -> bool:
    """Whether ``word`` is not a proper power of a shorter word."""
    return len(primitive_root(word)) == len(word)
