"""
Statement accumulation for one control-flow region.
"""

from typing import Iterable, List

from ..errors import ScopeError
from ..lang.statements import LocalVarDecl, Seqn, Stmt


class Scope:
    """
    Open list of statements for the innermost region being built.
    Once closed into a block, a scope accepts no more statements.
    """

    def __init__(self):
        self._statements: List[Stmt] = []
        self._closed = False

    def add(self, statement: Stmt) -> None:
        if self._closed:
            raise ScopeError(f"Cannot add statement to closed scope: {statement}")
        self._statements.append(statement)

    def close(self, declarations: Iterable[LocalVarDecl] = ()) -> Seqn:
        """Close the scope into a block carrying the given declarations."""
        if self._closed:
            raise ScopeError("Scope closed twice")
        self._closed = True
        return Seqn(list(self._statements), list(declarations))
