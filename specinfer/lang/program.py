"""
Top-level declarations and programs.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .expressions import Expression, Type
from .statements import INDENT, LocalVarDecl, Seqn


@dataclass(frozen=True)
class Field:
    """Heap field declaration."""
    name: str
    typ: Type = Type.REF

    def __str__(self) -> str:
        return f"field {self.name}: {self.typ}"


@dataclass
class Predicate:
    """
    Predicate declaration.
    A predicate without a body is abstract.
    """
    name: str
    parameters: List[LocalVarDecl] = field(default_factory=list)
    body: Optional[Expression] = None

    def __str__(self) -> str:
        params_str = ", ".join(str(param) for param in self.parameters)
        header = f"predicate {self.name}({params_str})"
        if self.body is None:
            return header
        return f"{header} {{\n{INDENT}{self.body}\n}}"


@dataclass
class Method:
    """Method declaration; `body` is None for abstract methods."""
    name: str
    parameters: List[LocalVarDecl] = field(default_factory=list)
    returns: List[LocalVarDecl] = field(default_factory=list)
    preconditions: List[Expression] = field(default_factory=list)
    postconditions: List[Expression] = field(default_factory=list)
    body: Optional[Seqn] = None

    def __str__(self) -> str:
        params_str = ", ".join(str(param) for param in self.parameters)
        lines = [f"method {self.name}({params_str})"]
        if self.returns:
            lines[0] += " returns (" + ", ".join(str(ret) for ret in self.returns) + ")"
        lines.extend(f"{INDENT}requires {pre}" for pre in self.preconditions)
        lines.extend(f"{INDENT}ensures {post}" for post in self.postconditions)
        if self.body is not None:
            lines.append(str(self.body))
        return "\n".join(lines)


@dataclass
class Program:
    """
    A complete verification program.

    Only fields, predicates and methods are modelled; the remaining
    declaration kinds are kept as opaque placeholders.
    """
    domains: List[Any] = field(default_factory=list)
    fields: List[Field] = field(default_factory=list)
    functions: List[Any] = field(default_factory=list)
    predicates: List[Predicate] = field(default_factory=list)
    methods: List[Method] = field(default_factory=list)
    extensions: List[Any] = field(default_factory=list)

    def find_predicate(self, name: str) -> Optional[Predicate]:
        for predicate in self.predicates:
            if predicate.name == name:
                return predicate
        return None

    def find_method(self, name: str) -> Optional[Method]:
        for method in self.methods:
            if method.name == name:
                return method
        return None

    def __str__(self) -> str:
        sections = []
        if self.fields:
            sections.append("\n".join(str(decl) for decl in self.fields))
        for group in (self.predicates, self.methods):
            if group:
                sections.append("\n\n".join(str(decl) for decl in group))
        return "\n\n".join(sections) + "\n"
