"""
Specifications and their instances.

A specification describes a predicate whose body is to be inferred:
its formal parameters and the atoms (sub-expressions over the formals)
the learner may use to build candidate bodies. An instance binds a
specification to concrete variable arguments.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..lang.expressions import Expression, LocalVar
from ..lang.statements import LocalVarDecl
from ..lang.traversal import substitute


@dataclass(frozen=True)
class Specification:
    """Predicate to infer, with its formal parameters and atoms."""
    name: str
    parameters: Tuple[LocalVarDecl, ...] = field(default_factory=tuple)
    atoms: Tuple[Expression, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        params_str = ", ".join(str(param) for param in self.parameters)
        return f"{self.name}({params_str})"


@dataclass(frozen=True)
class Instance:
    """
    A specification applied to variable arguments.

    Arguments are always plain variables; the check builder introduces
    temporaries for anything else before an instance is created.
    """
    specification: Specification
    arguments: Tuple[LocalVar, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return self.specification.name

    @property
    def formal_atoms(self) -> Tuple[Expression, ...]:
        return self.specification.atoms

    @property
    def actual_atoms(self) -> List[Expression]:
        """Atoms with formal parameters replaced by the arguments."""
        return [self.to_actual(atom) for atom in self.formal_atoms]

    def to_actual(self, expression: Expression) -> Expression:
        """Instantiate an expression over the formals with the arguments."""
        mapping: Dict[str, Expression] = {
            param.name: argument
            for param, argument in zip(self.specification.parameters, self.arguments)
        }
        return substitute(expression, mapping)

    def __str__(self) -> str:
        args_str = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.name}({args_str})"
