"""Custom exceptions for autbasis."""


class AutbasisError(Exception):
    """Base exception for all autbasis errors."""

    pass


class MalformedAutomatonError(AutbasisError):
    """Raised when an automaton description is inconsistent."""

    def __init__(self, message: str, position: int = -1) -> None:
        self.position = position
        super().__init__(message)

    def __str__(self) -> str:
        if self.position >= 0:
            return f"{super().__str__()} at position {self.position}"
        return super().__str__()


class InconsistentResultError(AutbasisError):
    """Raised when an exact result and its heuristic cross-check disagree."""

    pass


class OracleError(AutbasisError):
    """Raised when the external prover does not produce an answer."""

    pass
