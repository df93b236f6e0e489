"""
Unit tests for specifications, instances and hypotheses.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from specinfer.errors import InstanceResolutionError
from specinfer.inference import Hypothesis, Instance, Specification, SpecificationInference
from specinfer.lang import (
    BinaryOp,
    FieldAccess,
    IntLit,
    LocalVar,
    LocalVarDecl,
    NullLit,
    Predicate,
    TrueLit,
    Type,
)


A = LocalVar("a", Type.REF)
X = LocalVar("x", Type.REF)

SEG = Specification(
    name="seg",
    parameters=(LocalVarDecl("a", Type.REF), LocalVarDecl("b", Type.REF)),
    atoms=(BinaryOp("==", A, LocalVar("b", Type.REF)),),
)


class TestInstance:
    """Tests for Instance class."""

    def test_actual_atoms(self):
        """Test that atoms are instantiated with the arguments."""
        y = LocalVar("y", Type.REF)
        instance = Instance(SEG, (X, y))

        assert instance.name == "seg"
        assert instance.formal_atoms == SEG.atoms
        assert instance.actual_atoms == [BinaryOp("==", X, y)]
        assert str(instance) == "seg(x, y)"

    def test_to_actual_nested(self):
        """Test instantiation below field accesses."""
        instance = Instance(SEG, (X, X))
        expression = FieldAccess(FieldAccess(A, "next"), "val", Type.INT)

        assert instance.to_actual(expression) == FieldAccess(FieldAccess(X, "next"), "val", Type.INT)


class TestHypothesis:
    """Tests for Hypothesis class."""

    def test_default_body(self):
        """Test that missing bodies default to true."""
        assert Hypothesis().get_body("seg") == TrueLit()

    def test_get_predicate(self):
        """Test predicate construction for a specification."""
        body = BinaryOp("!=", A, NullLit())
        predicate = Hypothesis({"seg": body}).get_predicate(SEG)

        assert predicate == Predicate("seg", list(SEG.parameters), body)

    def test_update(self):
        """Test replacing and removing bodies."""
        hypothesis = Hypothesis()
        hypothesis.update("seg", IntLit(1))
        hypothesis.update("seg", None)

        assert "seg" not in hypothesis.bodies


class TestSpecificationInference:
    """Tests for SpecificationInference class."""

    def test_instance(self):
        """Test resolving an instance."""
        y = LocalVar("y", Type.REF)
        inference = SpecificationInference([SEG])

        assert inference.instance("seg", [X, y]) == Instance(SEG, (X, y))

    def test_unknown_name(self):
        """Test resolving an unknown predicate."""
        with pytest.raises(InstanceResolutionError):
            SpecificationInference([SEG]).instance("list", [X])

    def test_arity_mismatch(self):
        """Test resolving with the wrong number of arguments."""
        with pytest.raises(InstanceResolutionError):
            SpecificationInference([SEG]).instance("seg", [X])

    def test_predicates(self):
        """Test predicates derived from a hypothesis."""
        predicates = SpecificationInference([SEG]).predicates(Hypothesis())

        assert [p.name for p in predicates] == ["seg"]
        assert predicates[0].body == TrueLit()

    def test_duplicate_specification(self):
        """Test that duplicate specifications are rejected."""
        with pytest.raises(ValueError):
            SpecificationInference([SEG, SEG])
