"""
Problem descriptions: original declarations, specifications, a hypothesis
and check templates, loaded from YAML.

Example:

    fields: {next: Ref}
    variables: {x: Ref}
    specifications:
      - name: list
        parameters: {x: Ref}
        atoms:
          - {kind: binary, op: "!=", left: x, right: null}
    hypothesis:
      list: true
    checks:
      - - inhale: {kind: acc, predicate: list, args: [x]}
        - exhale: {kind: acc, predicate: list, args: [x]}

Expressions are dictionaries with a `kind` key; plain strings, integers,
booleans and null are shorthands for variables and literals. Statements
are dictionaries keyed by the statement keyword.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pathlib import Path

import yaml

from .errors import ProblemFormatError
from .inference.hypothesis import Hypothesis
from .inference.inference import SpecificationInference
from .inference.specification import Specification
from .lang.expressions import (
    BinaryOp,
    BoolLit,
    Expression,
    FieldAccess,
    FractionalPerm,
    FullPerm,
    FuncApp,
    IntLit,
    LocalVar,
    NullLit,
    PredicateAccess,
    PredicateAccessPredicate,
    Type,
    UnaryOp,
)
from .lang.program import Field, Predicate, Program
from .lang.statements import (
    Assert,
    Assume,
    Exhale,
    FieldAssign,
    Fold,
    If,
    Inhale,
    Label,
    LocalVarAssign,
    LocalVarDecl,
    MethodCall,
    Seqn,
    Stmt,
    Unfold,
)


def parse_type(name: Any) -> Type:
    try:
        return Type.from_string(str(name))
    except ValueError as e:
        raise ProblemFormatError(str(e)) from e


def _mapping(data: Any, what: str) -> Dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ProblemFormatError(f"Expected mapping for {what}, got: {data!r}")
    return data


def _sequence(data: Any, what: str) -> List[Any]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise ProblemFormatError(f"Expected list for {what}, got: {data!r}")
    return data


def _require(data: Dict[str, Any], key: str, what: str) -> Any:
    if key not in data:
        raise ProblemFormatError(f"Missing '{key}' in {what}: {data}")
    return data[key]


class ProblemParser:
    """Parses expressions and statements with known field and variable types."""

    EXPRESSION_STATEMENTS = {
        "inhale": Inhale,
        "exhale": Exhale,
        "fold": Fold,
        "unfold": Unfold,
        "assert": Assert,
        "assume": Assume,
    }

    def __init__(self, fields: Optional[Dict[str, Type]] = None, variables: Optional[Dict[str, Type]] = None):
        self.fields = dict(fields or {})
        self.variables = dict(variables or {})

    def variable(self, name: str) -> LocalVar:
        return LocalVar(name, self.variables.get(name, Type.REF))

    def parse_declarations(self, data: Any) -> List[LocalVarDecl]:
        """Parse a `{name: type}` mapping into declarations."""
        if data is None:
            return []
        if not isinstance(data, dict):
            raise ProblemFormatError(f"Expected mapping from names to types, got: {data}")
        return [LocalVarDecl(str(name), parse_type(typ)) for name, typ in data.items()]

    def parse_expression(self, data: Any) -> Expression:
        """Parse an expression from its dictionary form or a shorthand."""
        if data is None:
            return NullLit()
        if isinstance(data, bool):
            return BoolLit(data)
        if isinstance(data, int):
            return IntLit(data)
        if isinstance(data, str):
            if data == "write":
                return FullPerm()
            return self.variable(data)
        if not isinstance(data, dict):
            raise ProblemFormatError(f"Cannot parse expression: {data!r}")

        kind = _require(data, "kind", "expression")
        if kind == "var":
            name = _require(data, "name", "variable")
            if "type" in data:
                return LocalVar(name, parse_type(data["type"]))
            return self.variable(name)
        elif kind == "int":
            value = _require(data, "value", "integer literal")
            try:
                return IntLit(int(value))
            except (TypeError, ValueError) as e:
                raise ProblemFormatError(f"Invalid integer literal: {value!r}") from e
        elif kind == "bool":
            return BoolLit(bool(_require(data, "value", "boolean literal")))
        elif kind == "null":
            return NullLit()
        elif kind == "field":
            name = _require(data, "field", "field access")
            if "type" in data:
                field_type = parse_type(data["type"])
            else:
                field_type = self.fields.get(name, Type.REF)
            return FieldAccess(self.parse_expression(_require(data, "receiver", "field access")), name, field_type)
        elif kind == "binary":
            return BinaryOp(
                op=_require(data, "op", "binary operation"),
                left=self.parse_expression(_require(data, "left", "binary operation")),
                right=self.parse_expression(_require(data, "right", "binary operation")),
            )
        elif kind == "unary":
            return UnaryOp(
                op=_require(data, "op", "unary operation"),
                operand=self.parse_expression(_require(data, "operand", "unary operation")),
            )
        elif kind == "call":
            return FuncApp(
                name=_require(data, "name", "function application"),
                arguments=tuple(self.parse_expression(arg) for arg in _sequence(data.get("args"), "arguments")),
                result_type=parse_type(data.get("type", "Int")),
            )
        elif kind == "acc":
            access = PredicateAccess(
                name=_require(data, "predicate", "predicate access"),
                arguments=tuple(self.parse_expression(arg) for arg in _sequence(data.get("args"), "arguments")),
            )
            permission = self.parse_expression(data.get("perm", "write"))
            return PredicateAccessPredicate(access, permission)
        elif kind == "write":
            return FullPerm()
        elif kind == "frac":
            return FractionalPerm(
                self.parse_expression(_require(data, "numerator", "fractional permission")),
                self.parse_expression(_require(data, "denominator", "fractional permission")),
            )
        else:
            raise ProblemFormatError(f"Unknown expression kind: {kind}")

    def parse_block(self, data: Any) -> Seqn:
        if data is None:
            return Seqn()
        if not isinstance(data, list):
            raise ProblemFormatError(f"Expected list of statements, got: {data!r}")
        return Seqn([self.parse_statement(item) for item in data])

    def parse_statement(self, data: Any) -> Stmt:
        """Parse a statement from its dictionary form."""
        if not isinstance(data, dict) or not data:
            raise ProblemFormatError(f"Cannot parse statement: {data!r}")

        for keyword, constructor in self.EXPRESSION_STATEMENTS.items():
            if keyword in data:
                return constructor(self.parse_expression(data[keyword]))

        if "assign" in data:
            target = self.parse_expression(data["assign"])
            value = self.parse_expression(_require(data, "value", "assignment"))
            if isinstance(target, LocalVar):
                return LocalVarAssign(target, value)
            if isinstance(target, FieldAccess):
                return FieldAssign(target, value)
            raise ProblemFormatError(f"Cannot assign to {target}")
        elif "label" in data:
            return Label(str(data["label"]))
        elif "if" in data:
            return If(
                self.parse_expression(data["if"]),
                self.parse_block(data.get("then")),
                self.parse_block(data.get("else")),
            )
        elif "call" in data:
            return MethodCall(
                name=str(data["call"]),
                arguments=[self.parse_expression(arg) for arg in _sequence(data.get("args"), "arguments")],
                targets=[self.variable(str(name)) for name in _sequence(data.get("targets"), "call targets")],
            )
        elif "block" in data:
            return self.parse_block(data["block"])
        else:
            raise ProblemFormatError(f"Unknown statement: {data!r}")


@dataclass
class Problem:
    """Everything needed to build a check program."""
    program: Program
    specifications: List[Specification] = field(default_factory=list)
    hypothesis: Hypothesis = field(default_factory=Hypothesis)
    checks: List[Seqn] = field(default_factory=list)

    def inference(self) -> SpecificationInference:
        try:
            return SpecificationInference(self.specifications)
        except ValueError as e:
            raise ProblemFormatError(str(e)) from e

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Problem":
        """Create a problem from its dictionary form."""
        if not isinstance(data, dict):
            raise ProblemFormatError("Problem description must be a mapping")

        fields = {str(name): parse_type(typ) for name, typ in _mapping(data.get("fields"), "fields").items()}
        variables = {str(name): parse_type(typ) for name, typ in _mapping(data.get("variables"), "variables").items()}

        specifications = []
        for spec_data in _sequence(data.get("specifications"), "specifications"):
            spec_data = _mapping(spec_data, "specification")
            parameters = ProblemParser(fields).parse_declarations(spec_data.get("parameters"))
            # atoms are expressions over the formal parameters
            parser = ProblemParser(fields, {decl.name: decl.typ for decl in parameters})
            specifications.append(Specification(
                name=_require(spec_data, "name", "specification"),
                parameters=tuple(parameters),
                atoms=tuple(parser.parse_expression(atom) for atom in _sequence(spec_data.get("atoms"), "atoms")),
            ))
        formals = {spec.name: spec.parameters for spec in specifications}

        predicates = []
        for pred_data in _sequence(data.get("predicates"), "predicates"):
            pred_data = _mapping(pred_data, "predicate")
            parameters = ProblemParser(fields).parse_declarations(pred_data.get("parameters"))
            parser = ProblemParser(fields, {decl.name: decl.typ for decl in parameters})
            body = pred_data.get("body")
            predicates.append(Predicate(
                name=_require(pred_data, "name", "predicate"),
                parameters=parameters,
                body=None if body is None else parser.parse_expression(body),
            ))

        hypothesis = Hypothesis()
        for name, body in _mapping(data.get("hypothesis"), "hypothesis").items():
            if name not in formals:
                raise ProblemFormatError(f"Hypothesis for unknown specification: {name}")
            parser = ProblemParser(fields, {decl.name: decl.typ for decl in formals[name]})
            hypothesis.update(name, parser.parse_expression(body))

        parser = ProblemParser(fields, variables)
        checks = [parser.parse_block(check) for check in _sequence(data.get("checks"), "checks")]

        program = Program(
            fields=[Field(name, typ) for name, typ in fields.items()],
            predicates=predicates,
        )
        return cls(program, specifications, hypothesis, checks)


def load_problem(problem_path: str) -> Problem:
    """Load a problem description from a YAML file."""
    path = Path(problem_path)

    if not path.exists():
        raise FileNotFoundError(f"Problem file not found: {problem_path}")

    with open(path, 'r') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ProblemFormatError(f"Invalid YAML in {problem_path}: {e}") from e

    return Problem.from_dict(data or {})
