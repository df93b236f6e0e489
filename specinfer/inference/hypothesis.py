"""
Hypotheses: the learner's current guess for every predicate body.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from ..lang.expressions import Expression, TrueLit
from ..lang.program import Predicate
from .specification import Specification


@dataclass
class Hypothesis:
    """
    Candidate predicate bodies keyed by predicate name.
    Predicates without a candidate default to `true`.
    """
    bodies: Dict[str, Expression] = field(default_factory=dict)

    def get_body(self, name: str) -> Expression:
        return self.bodies.get(name, TrueLit())

    def get_predicate(self, specification: Specification) -> Predicate:
        """Predicate declaration for a specification under this hypothesis."""
        return Predicate(
            name=specification.name,
            parameters=list(specification.parameters),
            body=self.get_body(specification.name),
        )

    def update(self, name: str, body: Optional[Expression]) -> None:
        if body is None:
            self.bodies.pop(name, None)
        else:
            self.bodies[name] = body
