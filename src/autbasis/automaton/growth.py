"""Exact polynomial vs. exponential growth test.

Follows Gawrychowski, Krieger, Rampersad and Shallit, "Finding the growth
rate of a regular language in polynomial time":
1. Compute the SCCs of the transition graph
2. For every non-trivial component on an accepting run, take a cycling word
   and its primitive root ``r``
3. Walk ``r`` from the cycle's state, giving each state a residue mod |r|
4. The component is a single commutative cycle iff no state leaves the walk
   inside the component on any symbol other than ``r[residue]``

The language has polynomial growth iff every such component passes.
"""

import logging
from typing import Dict, List, Optional, Set, Tuple

from autbasis.automaton.cycles import find_cycling_word, primitive_root
from autbasis.automaton.dfa import Automaton, Word, format_word
from autbasis.automaton.scc import TransitionGraph, component_members
from autbasis.diagnostics.growth import (
    ComponentWitness,
    Growth,
    Obstruction,
    ResidueAssignment,
)


logger = logging.getLogger(__name__)


class GrowthClassifier:
    """Decide whether an automaton accepts a language of polynomial growth."""

    def __init__(self, automaton: Automaton):
        self.automaton = automaton
        self.graph = TransitionGraph.from_automaton(automaton)
        self.components: List[int] = self.graph.compute_components()
        self.members: Dict[int, List[int]] = component_members(self.components)

    def classify(self) -> Growth:
        """Classify the growth of the accepted language.

        Only states reachable from the initial state that can also reach an
        accepting state are examined, so components the accepted words never
        pass through do not affect the verdict.

        Returns:
            A polynomial verdict with one witness per non-trivial component,
            or an exponential verdict carrying the obstruction found.
        """
        useful = self.automaton.useful_states()
        completed: Set[int] = set()
        witnesses: List[ComponentWitness] = []

        for state in range(self.automaton.state_count):
            component = self.components[state]
            if component in completed or state not in useful:
                continue

            cycling_word = find_cycling_word(self.automaton, state, self.components)
            if cycling_word is None:
                # Trivial component, nothing to pump
                completed.add(component)
                continue

            root = primitive_root(cycling_word)
            logger.debug(
                "State %d: cycling word %s, primitive root %s",
                state,
                format_word(cycling_word),
                format_word(root),
            )

            assignment, obstruction = self.assign_residues(state, root)
            logger.debug("Residues for component %d: %s", component, assignment.residue_of)
            witnesses.append(
                ComponentWitness(component, state, cycling_word, root, assignment)
            )
            if obstruction is None:
                obstruction = self.verify_assignment(component, assignment)
            if obstruction is not None:
                logger.debug("Exponential growth: %s", obstruction.describe())
                return Growth.exponential(witnesses, obstruction)

            completed.add(component)

        return Growth.polynomial(witnesses)

    def assign_residues(
        self, state: int, root: Word
    ) -> Tuple[ResidueAssignment, Optional[Obstruction]]:
        """Walk ``root`` from ``state``, giving every visited state a residue.

        The walk starts with residue 0, reads ``root[residue]`` at each step
        and stops once it leaves the component or reaches an assigned state.

        Returns:
            The assignment built so far, and an obstruction if the walk came
            back to a state with a different residue.
        """
        period = len(root)
        residue_of: Dict[int, int] = {}
        classes: List[List[int]] = [[] for _ in range(period)]
        current, residue = state, 0

        while current not in residue_of:
            residue_of[current] = residue
            classes[residue].append(current)
            target = self.automaton.step(current, root[residue])
            if self.components[target] != self.components[current]:
                break
            current, residue = target, (residue + 1) % period

        assignment = ResidueAssignment(root, residue_of, classes)
        found = residue_of[current]
        if found != residue:
            return assignment, Obstruction(
                state=current, expected_residue=residue, found_residue=found
            )
        return assignment, None

    def verify_assignment(
        self, component: int, assignment: ResidueAssignment
    ) -> Optional[Obstruction]:
        """Check that each state stays in ``component`` only on its residue's symbol.

        Returns:
            The first violation found, or None if the component commutes.
        """
        for state in self.members[component]:
            if state not in assignment.residue_of:
                return Obstruction(state=state)
            expected = assignment.expected_symbol(state)
            for symbol, target in enumerate(self.automaton.successors(state)):
                if self.components[target] == component and symbol != expected:
                    return Obstruction(state=state, symbol=symbol)
        return None


def classify_growth(automaton: Automaton) -> Growth:
    """Classify the growth of the language accepted by ``automaton``."""
    return GrowthClassifier(automaton).classify()


def is_polynomial(automaton: Automaton) -> bool:
    """Whether ``automaton`` accepts a language of polynomial growth."""
    return classify_growth(automaton).is_polynomial
