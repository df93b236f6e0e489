"""
Check-program construction: namespaces, snapshot contexts and the builder.
"""

from .namespace import Namespace
from .context import Context, Role, Snapshot
from .scope import Scope
from .builder import CheckBuilder

__all__ = [
    "Namespace",
    "Context",
    "Role",
    "Snapshot",
    "Scope",
    "CheckBuilder",
]
