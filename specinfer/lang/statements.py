"""
Statement nodes of the verification language.

The statement set is closed: the check builder dispatches over
Seqn, If, Inhale, Exhale and MethodCall and passes every other kind
through unchanged.
"""

from dataclasses import dataclass, field
from typing import List

from .expressions import Expression, FieldAccess, LocalVar, Type


INDENT = "  "


def _indent(lines: List[str]) -> List[str]:
    return [INDENT + line for line in lines]


class Stmt:
    """Base class for statements."""

    def to_lines(self) -> List[str]:
        """Render the statement as lines of surface syntax."""
        return [str(self)]


@dataclass(frozen=True)
class LocalVarDecl:
    """Declaration of a local variable, parameter or return value."""
    name: str
    typ: Type = Type.REF

    def __str__(self) -> str:
        return f"{self.name}: {self.typ}"


@dataclass
class Seqn(Stmt):
    """Sequence of statements with optional local declarations."""
    statements: List[Stmt] = field(default_factory=list)
    declarations: List[LocalVarDecl] = field(default_factory=list)

    def to_lines(self) -> List[str]:
        lines = [f"var {decl}" for decl in self.declarations]
        for statement in self.statements:
            if isinstance(statement, Seqn):
                lines.append("{")
                lines.extend(_indent(statement.to_lines()))
                lines.append("}")
            else:
                lines.extend(statement.to_lines())
        return lines

    def __str__(self) -> str:
        body = _indent(self.to_lines())
        return "\n".join(["{"] + body + ["}"])


@dataclass
class If(Stmt):
    """Conditional statement."""
    condition: Expression
    then_body: Seqn = field(default_factory=Seqn)
    else_body: Seqn = field(default_factory=Seqn)

    def to_lines(self) -> List[str]:
        lines = [f"if ({self.condition}) {{"]
        lines.extend(_indent(self.then_body.to_lines()))
        if self.else_body.statements or self.else_body.declarations:
            lines.append("} else {")
            lines.extend(_indent(self.else_body.to_lines()))
        lines.append("}")
        return lines

    def __str__(self) -> str:
        return "\n".join(self.to_lines())


@dataclass
class Inhale(Stmt):
    expression: Expression

    def __str__(self) -> str:
        return f"inhale {self.expression}"


@dataclass
class Exhale(Stmt):
    expression: Expression

    def __str__(self) -> str:
        return f"exhale {self.expression}"


@dataclass
class Fold(Stmt):
    expression: Expression

    def __str__(self) -> str:
        return f"fold {self.expression}"


@dataclass
class Unfold(Stmt):
    expression: Expression

    def __str__(self) -> str:
        return f"unfold {self.expression}"


@dataclass
class Assert(Stmt):
    expression: Expression

    def __str__(self) -> str:
        return f"assert {self.expression}"


@dataclass
class Assume(Stmt):
    expression: Expression

    def __str__(self) -> str:
        return f"assume {self.expression}"


@dataclass
class LocalVarAssign(Stmt):
    target: LocalVar
    value: Expression

    def __str__(self) -> str:
        return f"{self.target} := {self.value}"


@dataclass
class FieldAssign(Stmt):
    target: FieldAccess
    value: Expression

    def __str__(self) -> str:
        return f"{self.target} := {self.value}"


@dataclass
class Label(Stmt):
    """Named program point; the verifier's model refers back to it."""
    name: str

    def __str__(self) -> str:
        return f"label {self.name}"


@dataclass
class MethodCall(Stmt):
    name: str
    arguments: List[Expression] = field(default_factory=list)
    targets: List[LocalVar] = field(default_factory=list)

    def __str__(self) -> str:
        args_str = ", ".join(str(arg) for arg in self.arguments)
        call = f"{self.name}({args_str})"
        if self.targets:
            targets_str = ", ".join(str(target) for target in self.targets)
            return f"{targets_str} := {call}"
        return call
