"""Automaton module for growth and GCD analysis."""

from autbasis.automaton.dfa import Automaton, Word, format_word
from autbasis.automaton.scc import TransitionGraph, compute_components, component_members
from autbasis.automaton.cycles import find_cycling_word, is_primitive, primitive_root
from autbasis.automaton.growth import GrowthClassifier, classify_growth, is_polynomial
from autbasis.automaton.heuristics import (
    count_accepted_words,
    heuristic_gcd,
    heuristic_is_polynomial,
    heuristic_word_length,
)
from autbasis.automaton.gcd import candidate_gcds, divisors, smallest_nonzero_accepted_word

__all__ = [
    "Automaton",
    "Word",
    "format_word",
    "TransitionGraph",
    "compute_components",
    "component_members",
    "find_cycling_word",
    "is_primitive",
    "primitive_root",
    "GrowthClassifier",
    "classify_growth",
    "is_polynomial",
    "count_accepted_words",
    "heuristic_gcd",
    "heuristic_is_polynomial",
    "heuristic_word_length",
    "candidate_gcds",
    "divisors",
    "smallest_nonzero_accepted_word",
]
