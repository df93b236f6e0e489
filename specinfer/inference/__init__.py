"""
Specifications, instances and hypotheses consumed by the check builder.
"""

from .specification import Specification, Instance
from .hypothesis import Hypothesis
from .inference import Inference, SpecificationInference

__all__ = [
    "Specification",
    "Instance",
    "Hypothesis",
    "Inference",
    "SpecificationInference",
]
