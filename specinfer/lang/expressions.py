"""
Expression nodes of the verification language.
Expressions are immutable so they can be shared between the original
templates and the instrumented program.
"""

from dataclasses import dataclass, field
from typing import Tuple
from enum import Enum


class Type(Enum):
    """Types of the verification language."""
    INT = "Int"
    BOOL = "Bool"
    REF = "Ref"
    PERM = "Perm"

    @classmethod
    def from_string(cls, name: str) -> "Type":
        """Parse a type from its surface name."""
        for member in cls:
            if member.value.lower() == name.lower():
                return member
        raise ValueError(f"Unknown type: {name}. Valid types: {[m.value for m in cls]}")

    def __str__(self) -> str:
        return self.value


BOOLEAN_OPERATORS = {"==", "!=", "<", "<=", ">", ">=", "&&", "||", "==>"}
ARITHMETIC_OPERATORS = {"+", "-", "*", "/", "\\", "%"}


class Expression:
    """Base class for expressions."""

    @property
    def typ(self) -> Type:
        raise NotImplementedError("Subclass must implement typ")


@dataclass(frozen=True)
class LocalVar(Expression):
    """Reference to a local variable."""
    name: str
    var_type: Type = Type.REF

    @property
    def typ(self) -> Type:
        return self.var_type

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IntLit(Expression):
    """Integer literal."""
    value: int

    @property
    def typ(self) -> Type:
        return Type.INT

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BoolLit(Expression):
    """Boolean literal."""
    value: bool

    @property
    def typ(self) -> Type:
        return Type.BOOL

    def __str__(self) -> str:
        return "true" if self.value else "false"


def TrueLit() -> BoolLit:
    return BoolLit(True)


def FalseLit() -> BoolLit:
    return BoolLit(False)


@dataclass(frozen=True)
class NullLit(Expression):
    """The null reference."""

    @property
    def typ(self) -> Type:
        return Type.REF

    def __str__(self) -> str:
        return "null"


@dataclass(frozen=True)
class FieldAccess(Expression):
    """Field read `receiver.field`."""
    receiver: Expression
    field: str
    field_type: Type = Type.REF

    @property
    def typ(self) -> Type:
        return self.field_type

    def __str__(self) -> str:
        return f"{self.receiver}.{self.field}"


@dataclass(frozen=True)
class BinaryOp(Expression):
    """Binary operation; comparisons and connectives are boolean."""
    op: str
    left: Expression
    right: Expression

    @property
    def typ(self) -> Type:
        if self.op in BOOLEAN_OPERATORS:
            return Type.BOOL
        if self.left.typ == Type.PERM or self.right.typ == Type.PERM:
            return Type.PERM
        return Type.INT

    def __str__(self) -> str:
        return f"({self.left} {self.op} {self.right})"


@dataclass(frozen=True)
class UnaryOp(Expression):
    """Negation (`!`) or arithmetic minus (`-`)."""
    op: str
    operand: Expression

    @property
    def typ(self) -> Type:
        return Type.BOOL if self.op == "!" else self.operand.typ

    def __str__(self) -> str:
        return f"{self.op}{self.operand}"


@dataclass(frozen=True)
class FuncApp(Expression):
    """Application of a (heap-dependent) function."""
    name: str
    arguments: Tuple[Expression, ...] = field(default_factory=tuple)
    result_type: Type = Type.INT

    @property
    def typ(self) -> Type:
        return self.result_type

    def __str__(self) -> str:
        args_str = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.name}({args_str})"


@dataclass(frozen=True)
class FullPerm(Expression):
    """Full (write) permission."""

    @property
    def typ(self) -> Type:
        return Type.PERM

    def __str__(self) -> str:
        return "write"


@dataclass(frozen=True)
class FractionalPerm(Expression):
    """Fractional permission `numerator/denominator`."""
    numerator: Expression
    denominator: Expression

    @property
    def typ(self) -> Type:
        return Type.PERM

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


@dataclass(frozen=True)
class PredicateAccess(Expression):
    """Predicate location `name(arguments)`."""
    name: str
    arguments: Tuple[Expression, ...] = field(default_factory=tuple)

    @property
    def typ(self) -> Type:
        return Type.BOOL

    def __str__(self) -> str:
        args_str = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.name}({args_str})"


@dataclass(frozen=True)
class PredicateAccessPredicate(Expression):
    """Permission to a predicate instance, `acc(P(args), perm)`."""
    access: PredicateAccess
    permission: Expression = field(default_factory=FullPerm)

    @property
    def typ(self) -> Type:
        return Type.BOOL

    def __str__(self) -> str:
        return f"acc({self.access}, {self.permission})"
