"""
specinfer: check-program construction for specification inference.

This package turns check templates containing placeholder inhale/exhale
statements into verification programs, and records which specification
instances are active at every snapshot point.

Components:
    - lang: expression, statement and program nodes
    - inference: specifications, instances, hypotheses
    - checks: namespace, context and the check builder
"""

__version__ = "0.1.0"
__author__ = "specinfer developers"
