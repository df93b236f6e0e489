"""
Unit tests for statement scopes.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from specinfer.checks import CheckBuilder, Scope
from specinfer.errors import ScopeError
from specinfer.inference import Hypothesis, SpecificationInference
from specinfer.lang import Label, LocalVarDecl, Program, Seqn, Type


class TestScope:
    """Tests for Scope class."""

    def test_close(self):
        """Test closing a scope into a block."""
        scope = Scope()
        scope.add(Label("l"))

        assert scope.close() == Seqn([Label("l")])

    def test_close_with_declarations(self):
        """Test that declarations are attached to the closed block."""
        scope = Scope()
        scope.add(Label("l"))
        declarations = [LocalVarDecl("y", Type.INT)]

        assert scope.close(declarations) == Seqn([Label("l")], declarations)

    def test_add_after_close(self):
        """Test that closed scopes reject statements."""
        scope = Scope()
        scope.close()

        with pytest.raises(ScopeError):
            scope.add(Label("l"))

    def test_close_twice(self):
        """Test that a scope cannot be closed twice."""
        scope = Scope()
        scope.close()

        with pytest.raises(ScopeError):
            scope.close()


class ClosedScopeBuilder(CheckBuilder):
    """Builder that instruments into a scope it already closed."""

    def instrument_block(self, sequence):
        scope = Scope()
        block = scope.close()
        for statement in sequence.statements:
            self.instrument(statement, scope)
        return block


class TestScopeMisuse:
    """Tests for scope misuse during a build."""

    def test_error_propagates_from_build(self):
        """Test that scope errors abort the build."""
        builder = ClosedScopeBuilder(Program(), SpecificationInference([]))

        with pytest.raises(ScopeError):
            builder.basic_check([Seqn([Label("l")])], Hypothesis())
