"""
Exceptions raised while building check programs.
"""


class CheckBuildError(Exception):
    """Base class for failures that abort a single build."""


class UnsupportedConstructError(CheckBuildError):
    """A check template contains a statement the builder cannot instrument."""

    def __init__(self, construct: str, detail: str = ""):
        message = f"Unsupported construct in check template: {construct}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.construct = construct


class InstanceResolutionError(CheckBuildError):
    """No specification instance exists for a predicate access."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Cannot resolve instance of '{name}': {reason}")
        self.name = name


class ScopeError(RuntimeError):
    """A statement scope was used after it was closed."""


class ProblemFormatError(ValueError):
    """A problem description is malformed."""
