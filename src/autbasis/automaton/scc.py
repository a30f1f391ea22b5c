"""Strongly connected components of an automaton's transition graph.

Components are computed with Tarjan's algorithm:
1. Visit states depth-first, recording a discovery index and a low-link
2. Keep visited states on a stack until their component is known
3. A state whose low-link equals its own index closes a component; every
   state stacked after it (inclusive) belongs to that component

The traversal uses an explicit work stack so automata with many states do
not run into the interpreter's recursion limit.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List

from autbasis.automaton.dfa import Automaton


@dataclass
class TransitionGraph:
    """Graph representation for SCC computation."""

    neighbors: List[List[int]]

    @classmethod
    def from_automaton(cls, automaton: Automaton) -> "TransitionGraph":
        """Build graph from the automaton's distinct successors."""
        return cls(neighbors=automaton.adjacency())

    @property
    def size(self) -> int:
        return len(self.neighbors)

    def compute_components(self) -> List[int]:
        """Label every state with the id of its strongly connected component.

        Ids count up from 0 in the order components are closed, so a
        component's id is larger than the ids of the components it reaches.

        Returns:
            List mapping each state to its component id.
        """
        n = self.size
        index: List[int] = [-1] * n
        lowlink: List[int] = [0] * n
        on_stack: List[bool] = [False] * n
        stack: List[int] = []
        component: List[int] = [-1] * n
        counter = 0
        next_index = 0

        for root in range(n):
            if index[root] >= 0:
                continue

            # (state, position of the next neighbor to look at)
            work = [(root, 0)]
            index[root] = lowlink[root] = next_index
            next_index += 1
            stack.append(root)
            on_stack[root] = True

            while work:
                v, position = work[-1]
                successors = self.neighbors[v]

                if position < len(successors):
                    work[-1] = (v, position + 1)
                    w = successors[position]
                    if index[w] < 0:
                        index[w] = lowlink[w] = next_index
                        next_index += 1
                        stack.append(w)
                        on_stack[w] = True
                        work.append((w, 0))
                    elif on_stack[w]:
                        lowlink[v] = min(lowlink[v], index[w])
                    continue

                work.pop()
                if work:
                    parent = work[-1][0]
                    lowlink[parent] = min(lowlink[parent], lowlink[v])

                if lowlink[v] == index[v]:
                    while True:
                        w = stack.pop()
                        on_stack[w] = False
                        component[w] = counter
                        if w == v:
                            break
                    counter += 1

        return component

    def has_self_loop(self, state: int) -> bool:
        """Check if a state has a transition to itself."""
        return state in self.neighbors[state]

    def is_trivial(self, members: List[int]) -> bool:
        """Check if a component is trivial (singleton without self-loop)."""
        if len(members) != 1:
            return False
        return not self.has_self_loop(members[0])


def compute_components(automaton: Automaton) -> List[int]:
    """Component id of every state of ``automaton``."""
    return TransitionGraph.from_automaton(automaton).compute_components()


def component_members(components: List[int]) -> Dict[int, List[int]]:
    """Group states by component id, each group in ascending state order."""
    members: Dict[int, List[int]] = defaultdict(list)
    for state, component in enumerate(components):
        members[component].append(state)
    return dict(members)
