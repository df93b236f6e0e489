"""
Integration tests for problem descriptions.

Tests loading problems from YAML and building their check programs.
"""

import pytest
import sys
import textwrap
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from specinfer.checks import CheckBuilder, Role
from specinfer.errors import ProblemFormatError
from specinfer.lang import (
    BinaryOp,
    FieldAccess,
    If,
    Inhale,
    Label,
    LocalVar,
    MethodCall,
    NullLit,
    PredicateAccessPredicate,
    TrueLit,
    Type,
)
from specinfer.problem import Problem, load_problem


PROBLEM = textwrap.dedent("""
    fields:
      next: Ref
      val: Int
    variables:
      x: Ref
      n: Int
    predicates:
      - name: cell
        parameters: {c: Ref}
    specifications:
      - name: list
        parameters: {a: Ref}
        atoms:
          - {kind: binary, op: "!=", left: a, right: null}
          - {kind: field, receiver: a, field: val}
    hypothesis:
      list: {kind: binary, op: "!=", left: a, right: null}
    checks:
      - - inhale: {kind: acc, predicate: list, args: [x]}
        - if: {kind: binary, op: ">", left: n, right: 0}
          then:
            - assign: x
              value: {kind: field, receiver: x, field: next}
          else: []
        - exhale: {kind: acc, predicate: list, args: [{kind: field, receiver: x, field: next}]}
""")


@pytest.fixture
def problem_file(tmp_path):
    path = tmp_path / "problem.yaml"
    path.write_text(PROBLEM)
    return path


class TestLoading:
    """Tests for loading problem descriptions."""

    def test_declarations(self, problem_file):
        """Test fields, predicates and specifications."""
        problem = load_problem(str(problem_file))

        assert [(f.name, f.typ) for f in problem.program.fields] == [("next", Type.REF), ("val", Type.INT)]
        assert problem.program.predicates[0].name == "cell"
        assert problem.program.predicates[0].body is None

        specification = problem.specifications[0]
        a = LocalVar("a", Type.REF)
        assert specification.atoms == (
            BinaryOp("!=", a, NullLit()),
            FieldAccess(a, "val", Type.INT),
        )
        assert problem.hypothesis.get_body("list") == BinaryOp("!=", a, NullLit())

    def test_checks(self, problem_file):
        """Test parsing of check templates."""
        problem = load_problem(str(problem_file))
        statements = problem.checks[0].statements

        assert len(problem.checks) == 1
        assert isinstance(statements[0], Inhale)
        assert isinstance(statements[0].expression, PredicateAccessPredicate)
        assert isinstance(statements[1], If)
        assert statements[1].condition.left == LocalVar("n", Type.INT)

    def test_unknown_statement(self):
        """Test that unknown statements are rejected."""
        with pytest.raises(ProblemFormatError):
            Problem.from_dict({"checks": [[{"havoc": "x"}]]})

    def test_unknown_expression(self):
        """Test that unknown expression kinds are rejected."""
        with pytest.raises(ProblemFormatError):
            Problem.from_dict({"checks": [[{"assert": {"kind": "forall"}}]]})

    def test_hypothesis_for_unknown_specification(self):
        """Test that hypotheses must refer to specifications."""
        with pytest.raises(ProblemFormatError):
            Problem.from_dict({"hypothesis": {"tree": True}})

    def test_method_call(self):
        """Test parsing a method call."""
        problem = Problem.from_dict({"checks": [[{"call": "m", "args": ["x"], "targets": ["y"]}]]})

        assert problem.checks[0].statements[0] == MethodCall(
            "m", [LocalVar("x", Type.REF)], [LocalVar("y", Type.REF)]
        )

    def test_invalid_integer(self):
        """Test that malformed integer literals are rejected."""
        with pytest.raises(ProblemFormatError):
            Problem.from_dict({"checks": [[{"assert": {"kind": "int", "value": "abc"}}]]})

    def test_specification_not_a_mapping(self):
        """Test that specification entries must be mappings."""
        with pytest.raises(ProblemFormatError):
            Problem.from_dict({"specifications": ["list"]})

    def test_arguments_not_a_list(self):
        """Test that predicate arguments must be lists."""
        with pytest.raises(ProblemFormatError):
            Problem.from_dict({"checks": [[{"inhale": {"kind": "acc", "predicate": "p", "args": 3}}]]})

    def test_duplicate_specification(self):
        """Test that duplicate specification names are rejected."""
        problem = Problem.from_dict({"specifications": [{"name": "list"}, {"name": "list"}]})

        with pytest.raises(ProblemFormatError):
            problem.inference()

    def test_invalid_yaml(self, tmp_path):
        """Test loading a file that is not valid YAML."""
        path = tmp_path / "problem.yaml"
        path.write_text("checks: [[{inhale: \n")

        with pytest.raises(ProblemFormatError):
            load_problem(str(path))

    def test_missing_file(self, tmp_path):
        """Test loading a missing problem file."""
        with pytest.raises(FileNotFoundError):
            load_problem(str(tmp_path / "missing.yaml"))


class TestBuild:
    """Tests for building loaded problems."""

    def test_build(self, problem_file):
        """Test the complete build of a loaded problem."""
        problem = load_problem(str(problem_file))
        builder = CheckBuilder(problem.program, problem.inference())
        program, context = builder.basic_check(problem.checks, problem.hypothesis)

        assert [p.name for p in program.predicates] == ["cell", "list"]
        assert program.find_predicate("list").body != TrueLit()

        method = program.find_method("check_0")
        labels = [s.name for s in method.body.statements if isinstance(s, Label)]
        assert labels == ["s_0", "s_1"]
        assert [s.role for s in context.snapshots("s_0")] == [Role.INHALED]
        assert [s.role for s in context.snapshots("s_1")] == [Role.EXHALED]
        assert str(context.exhaled("s_1")[0]) == "list(t_0)"

        text = str(program)
        assert "t_0 := x.next" in text
        assert "s_1_t_0 := t_0" in text
        assert "fold acc(list(t_0), write)" in text
        assert "var s_0_1: Int" in text
