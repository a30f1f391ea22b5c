"""Growth classification results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from autbasis.automaton.dfa import Word, format_word


class GrowthType(Enum):
    """How fast the number of accepted words grows with their length."""

    POLYNOMIAL = "polynomial"
    EXPONENTIAL = "exponential"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ResidueAssignment:
    """States of one component split into classes along a primitive root.

    ``classes[i]`` holds the states of residue ``i``, in the order the
    period-advancing walk assigned them.
    """

    root: Word
    residue_of: Dict[int, int]
    classes: List[List[int]]

    @property
    def period(self) -> int:
        return len(self.root)

    def expected_symbol(self, state: int) -> int:
        """The only symbol allowed to stay inside the component from ``state``."""
        return self.root[self.residue_of[state]]


@dataclass(frozen=True)
class Obstruction:
    """Why a component is not a single commutative cycle.

    Attributes:
        state: The state where the check failed.
        symbol: The offending symbol, if a transition is to blame.
        expected_residue: Residue the walk tried to give ``state``.
        found_residue: Residue ``state`` already had (None if unassigned).
    """

    state: int
    symbol: Optional[int] = None
    expected_residue: Optional[int] = None
    found_residue: Optional[int] = None

    def describe(self) -> str:
        if self.symbol is not None:
            return f"state {self.state} stays in its component on symbol {self.symbol}"
        if self.found_residue is None:
            return f"state {self.state} is not on the primitive cycle"
        return (
            f"state {self.state} has residue {self.found_residue}, "
            f"walk expected {self.expected_residue}"
        )


@dataclass(frozen=True)
class ComponentWitness:
    """What the classifier found for one non-trivial component."""

    component: int
    state: int
    cycling_word: Word
    primitive_root: Word
    assignment: Optional[ResidueAssignment] = None

    def __str__(self) -> str:
        return (
            f"component {self.component} (state {self.state}): "
            f"cycle {format_word(self.cycling_word)}, "
            f"root {format_word(self.primitive_root)}"
        )


@dataclass(frozen=True)
class Growth:
    """Growth verdict for a whole automaton."""

    type: GrowthType
    witnesses: List[ComponentWitness] = field(default_factory=list)
    obstruction: Optional[Obstruction] = None

    @classmethod
    def polynomial(cls, witnesses: List[ComponentWitness]) -> "Growth":
        return cls(GrowthType.POLYNOMIAL, list(witnesses))

    @classmethod
    def exponential(
        cls, witnesses: List[ComponentWitness], obstruction: Obstruction
    ) -> "Growth":
        return cls(GrowthType.EXPONENTIAL, list(witnesses), obstruction)

    @property
    def is_polynomial(self) -> bool:
        return self.type == GrowthType.POLYNOMIAL

    @property
    def is_exponential(self) -> bool:
        return self.type == GrowthType.EXPONENTIAL

    def __str__(self) -> str:
        if self.obstruction is not None:
            return f"{self.type} ({self.obstruction.describe()})"
        return str(self.type)
