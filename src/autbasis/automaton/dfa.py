"""Complete deterministic automata over radix-k numerals.

An automaton reads the most-significant-digit-first representation of a
non-negative integer, one symbol per digit, so that the accepted words
define a set of integers. The alphabet size doubles as the radix.
"""

from collections import deque
from dataclasses import dataclass
from typing import FrozenSet, List, Sequence, Tuple, Union

from autbasis.exceptions import MalformedAutomatonError


# A word is a sequence of symbols, most significant digit first
Word = Tuple[int, ...]
Encoding = Union[str, Sequence[int]]


def _decode(encoding: Encoding, what: str) -> List[int]:
    """Turn a digit string or an integer sequence into a list of integers."""
    if isinstance(encoding, str):
        values: List[int] = []
        for position, char in enumerate(encoding):
            if not "0" <= char <= "9":
                raise MalformedAutomatonError(
                    f"invalid {what} character {char!r}", position
                )
            values.append(ord(char) - ord("0"))
        return values
    return [int(value) for value in encoding]


def _encode(values: Sequence[int]) -> str:
    if all(value < 10 for value in values):
        return "".join(str(value) for value in values)
    return ".".join(str(value) for value in values)


@dataclass(frozen=True)
class Automaton:
    """Complete DFA.

    Attributes:
        transitions: One row per state holding the successor for each symbol.
        accepting: The accepting states.
        initial_state: The start state.
    """

    transitions: Tuple[Tuple[int, ...], ...]
    accepting: FrozenSet[int]
    initial_state: int = 0

    def __post_init__(self) -> None:
        rows = tuple(tuple(int(target) for target in row) for row in self.transitions)
        object.__setattr__(self, "transitions", rows)
        object.__setattr__(self, "accepting", frozenset(self.accepting))

        if not rows:
            raise MalformedAutomatonError("automaton must have at least one state")
        alphabet_size = len(rows[0])
        if alphabet_size == 0:
            raise MalformedAutomatonError("alphabet must not be empty")

        state_count = len(rows)
        for state, row in enumerate(rows):
            if len(row) != alphabet_size:
                raise MalformedAutomatonError(
                    f"state {state} has {len(row)} transitions, "
                    f"expected {alphabet_size}"
                )
            for symbol, target in enumerate(row):
                if not 0 <= target < state_count:
                    raise MalformedAutomatonError(
                        f"transition ({state}, {symbol}) -> {target} "
                        f"leaves the {state_count} states"
                    )
        for state in self.accepting:
            if not 0 <= state < state_count:
                raise MalformedAutomatonError(f"accepting state {state} out of range")
        if not 0 <= self.initial_state < state_count:
            raise MalformedAutomatonError(
                f"initial state {self.initial_state} out of range"
            )

    @classmethod
    def from_encoding(
        cls,
        state_count: int,
        transitions: Encoding,
        accepts: Encoding,
        initial_state: int = 0,
    ) -> "Automaton":
        """Build an automaton from the flat ``(n, transitions, accepts)`` triple.

        ``transitions`` lists, state by state, one successor per symbol, so
        the alphabet size is ``len(transitions) // state_count``. Digit
        strings such as ``"0111"`` are read one state per character.

        Raises:
            MalformedAutomatonError: If the encoding does not describe a
                complete DFA with ``state_count`` states.
        """
        if state_count <= 0:
            raise MalformedAutomatonError(
                f"state count must be positive, got {state_count}"
            )
        flat = _decode(transitions, "transition")
        if not flat or len(flat) % state_count != 0:
            raise MalformedAutomatonError(
                f"{len(flat)} transitions cannot be split over {state_count} states"
            )
        alphabet_size = len(flat) // state_count
        for position, target in enumerate(flat):
            if not 0 <= target < state_count:
                raise MalformedAutomatonError(
                    f"successor {target} out of range", position
                )
        rows = tuple(
            tuple(flat[state * alphabet_size : (state + 1) * alphabet_size])
            for state in range(state_count)
        )

        accepting = _decode(accepts, "accept")
        for position, state in enumerate(accepting):
            if not 0 <= state < state_count:
                raise MalformedAutomatonError(
                    f"accepting state {state} out of range", position
                )
        return cls(rows, frozenset(accepting), initial_state)

    @property
    def state_count(self) -> int:
        return len(self.transitions)

    @property
    def alphabet_size(self) -> int:
        return len(self.transitions[0])

    @property
    def radix(self) -> int:
        """Numeration base; identical to the alphabet size."""
        return self.alphabet_size

    @property
    def canonical_string(self) -> str:
        """Identifier of the form ``<n>_<transitions>_<accepts>``."""
        flat = [target for row in self.transitions for target in row]
        return (
            f"{self.state_count}_{_encode(flat)}_{_encode(sorted(self.accepting))}"
        )

    @property
    def has_leading_zero_loop(self) -> bool:
        """Whether leading zeros are insignificant (initial state loops on 0)."""
        return self.transitions[self.initial_state][0] == self.initial_state

    def step(self, state: int, symbol: int) -> int:
        return self.transitions[state][symbol]

    def successors(self, state: int) -> Tuple[int, ...]:
        """Successor of ``state`` for each symbol, in symbol order."""
        return self.transitions[state]

    def run(self, word: Union[str, Sequence[int]], state: int = -1) -> int:
        """Return the state reached after reading ``word``."""
        current = self.initial_state if state < 0 else state
        for symbol in self._symbols(word):
            current = self.transitions[current][symbol]
        return current

    def accepts(self, word: Union[str, Sequence[int]]) -> bool:
        return self.run(word) in self.accepting

    def accepts_value(self, value: int) -> bool:
        """Whether the canonical numeral of ``value`` is accepted."""
        return self.accepts(self.digits(value))

    def digits(self, value: int) -> Word:
        """Canonical representation of ``value`` (no leading zeros, 0 is empty)."""
        if value < 0:
            raise ValueError(f"cannot represent negative value {value}")
        if self.radix < 2:
            raise ValueError("values need a radix of at least 2")
        result: List[int] = []
        while value:
            value, digit = divmod(value, self.radix)
            result.append(digit)
        result.reverse()
        return tuple(result)

    def value(self, word: Union[str, Sequence[int]]) -> int:
        """Integer represented by ``word``."""
        total = 0
        for symbol in self._symbols(word):
            total = total * self.radix + symbol
        return total

    def adjacency(self) -> List[List[int]]:
        """Distinct successors of every state in ascending order."""
        return [sorted(set(row)) for row in self.transitions]

    def counting_matrix(self) -> List[List[int]]:
        """Matrix whose ``[i][j]`` entry counts the symbols taking ``i`` to ``j``."""
        n = self.state_count
        matrix = [[0] * n for _ in range(n)]
        for state, row in enumerate(self.transitions):
            for target in row:
                matrix[state][target] += 1
        return matrix

    def reachable_states(self) -> FrozenSet[int]:
        """States reachable from the initial state."""
        seen = {self.initial_state}
        queue = deque([self.initial_state])
        while queue:
            current = queue.popleft()
            for target in self.transitions[current]:
                if target not in seen:
                    seen.add(target)
                    queue.append(target)
        return frozenset(seen)

    def useful_states(self) -> FrozenSet[int]:
        """States that lie on some accepting run."""
        return self.reachable_states() & self.co_reachable_states()

    def co_reachable_states(self) -> FrozenSet[int]:
        """States from which some accepting state can be reached."""
        predecessors: List[List[int]] = [[] for _ in range(self.state_count)]
        for state, row in enumerate(self.transitions):
            for target in set(row):
                predecessors[target].append(state)

        seen = set(self.accepting)
        queue = deque(sorted(self.accepting))
        while queue:
            current = queue.popleft()
            for previous in predecessors[current]:
                if previous not in seen:
                    seen.add(previous)
                    queue.append(previous)
        return frozenset(seen)

    def to_walnut(self) -> str:
        """Render the automaton in Walnut's textual automaton format."""
        lines = [f"msd_{self.radix}"]
        for state, row in enumerate(self.transitions):
            lines.append(f"{state} {1 if state in self.accepting else 0}")
            for symbol, target in enumerate(row):
                lines.append(f"{symbol} -> {target}")
        return "\n".join(lines) + "\n"

    def _symbols(self, word: Union[str, Sequence[int]]) -> List[int]:
        symbols = [int(char) for char in word] if isinstance(word, str) else list(word)
        for symbol in symbols:
            if not 0 <= symbol < self.alphabet_size:
                raise ValueError(f"symbol {symbol} is not in the alphabet")
        return symbols


def format_word(word: Sequence[int]) -> str:
    """Readable form of a word, e.g. ``"0110"``."""
    return _encode(list(word))
