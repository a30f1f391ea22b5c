"""Prover queries, the oracle contract and the Walnut driver."""

from autbasis.prover.queries import Query, additive_basis_query, gcd_query
from autbasis.prover.oracle import Oracle, additive_basis_order, resolve_gcd
from autbasis.prover.walnut import WalnutOracle

__all__ = [
    "Query",
    "additive_basis_query",
    "gcd_query",
    "Oracle",
    "additive_basis_order",
    "resolve_gcd",
    "WalnutOracle",
]
