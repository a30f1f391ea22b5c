"""First-order queries handed to the prover.

The automaton is always installed in Walnut's word-automata library as
``LL``, so ``LL[n]=@1`` reads "n is accepted".
"""

from dataclasses import dataclass

from autbasis.automaton.dfa import Automaton


AUTOMATON_NAME = "LL"

GCD = "gcd"
ORDER = "order"


@dataclass(frozen=True)
class Query:
    """A named predicate about the automaton ``LL``.

    Attributes:
        name: Result file name used by the prover.
        predicate: Walnut predicate text.
        kind: ``"gcd"`` or ``"order"``.
        argument: The GCD candidate or the number of summands.
        asymptotic: For order queries, whether only large ``n`` must be sums.
    """

    name: str
    predicate: str
    kind: str
    argument: int
    asymptotic: bool = False

    def command(self) -> str:
        """The prover command evaluating this query."""
        return f'eval {self.name} "{self.predicate}":'


def gcd_query(automaton: Automaton, candidate: int) -> Query:
    """Does ``candidate`` divide every accepted value?"""
    if candidate < 1:
        raise ValueError(f"GCD candidate must be positive, got {candidate}")
    predicate = (
        f"A n ({AUTOMATON_NAME}[n]=@1)=>(E t (n={candidate}*t))"
    )
    return Query(
        name=f"gcd{candidate}_{automaton.canonical_string}",
        predicate=predicate,
        kind=GCD,
        argument=candidate,
    )


def additive_basis_query(
    automaton: Automaton, summands: int, asymptotic: bool = True
) -> Query:
    """Is every (large enough) ``n`` a sum of ``summands`` accepted values or zeros?"""
    if summands < 1:
        raise ValueError(f"need at least one summand, got {summands}")
    variables = [f"x{i}" for i in range(summands)]
    membership = "&".join(
        f"(({AUTOMATON_NAME}[{x}]=@1)|({x}=0))" for x in variables
    )
    body = f"(E {','.join(variables)} {membership}&(n={'+'.join(variables)}))"
    if asymptotic:
        predicate = f"E m (A n (n>=m)=>{body})"
    else:
        predicate = f"A n {body}"
    return Query(
        name=f"ord{summands}_{automaton.canonical_string}",
        predicate=predicate,
        kind=ORDER,
        argument=summands,
        asymptotic=asymptotic,
    )
