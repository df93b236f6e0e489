"""
The inference collaborator used by the check builder.

The builder only needs two services: the predicate declarations a
hypothesis induces, and instances for predicate accesses.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Sequence

from ..errors import InstanceResolutionError
from ..lang.expressions import LocalVar
from ..lang.program import Predicate
from .hypothesis import Hypothesis
from .specification import Instance, Specification

import logging

logger = logging.getLogger(__name__)


class Inference(ABC):
    """Interface between the check builder and the learner."""

    @abstractmethod
    def predicates(self, hypothesis: Hypothesis) -> List[Predicate]:
        """Predicate declarations derived from the hypothesis."""
        raise NotImplementedError("Subclass must implement predicates")

    @abstractmethod
    def instance(self, name: str, arguments: Sequence[LocalVar]) -> Instance:
        """
        Instance of the named specification for the given arguments.

        Raises:
            InstanceResolutionError: if no instance can be built
        """
        raise NotImplementedError("Subclass must implement instance")


class SpecificationInference(Inference):
    """Inference backed by a fixed set of specifications."""

    def __init__(self, specifications: Iterable[Specification]):
        self.specifications: Dict[str, Specification] = {}
        for specification in specifications:
            if specification.name in self.specifications:
                raise ValueError(f"Duplicate specification: {specification.name}")
            self.specifications[specification.name] = specification

    def predicates(self, hypothesis: Hypothesis) -> List[Predicate]:
        return [
            hypothesis.get_predicate(specification)
            for specification in self.specifications.values()
        ]

    def instance(self, name: str, arguments: Sequence[LocalVar]) -> Instance:
        specification = self.specifications.get(name)
        if specification is None:
            raise InstanceResolutionError(name, "unknown specification predicate")

        expected = len(specification.parameters)
        if len(arguments) != expected:
            raise InstanceResolutionError(
                name, f"expected {expected} arguments, got {len(arguments)}"
            )

        for argument in arguments:
            if not isinstance(argument, LocalVar):
                raise InstanceResolutionError(name, f"argument {argument} is not a variable")

        instance = Instance(specification, tuple(arguments))
        logger.debug(f"Resolved instance {instance}")
        return instance
