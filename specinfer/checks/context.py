"""
Snapshot context consumed by example extraction.

Maps every snapshot label of a check program to the specification
instances whose state was recorded there, and whether the instance was
inhaled or exhaled at that point.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List
from enum import Enum

from ..inference.specification import Instance


class Role(Enum):
    """Role of an instance at a snapshot."""
    INHALED = "inhaled"
    EXHALED = "exhaled"


@dataclass(frozen=True)
class Snapshot:
    """One recorded (instance, role) pair."""
    instance: Instance
    role: Role


class Context:
    """Append-only index from snapshot labels to snapshots."""

    def __init__(self):
        self._snapshots: Dict[str, List[Snapshot]] = {}

    def add(self, label: str, instance: Instance, role: Role) -> None:
        self._snapshots.setdefault(label, []).append(Snapshot(instance, role))

    def add_inhaled(self, label: str, instance: Instance) -> None:
        self.add(label, instance, Role.INHALED)

    def add_exhaled(self, label: str, instance: Instance) -> None:
        self.add(label, instance, Role.EXHALED)

    @property
    def labels(self) -> List[str]:
        """Labels in registration order."""
        return list(self._snapshots)

    def snapshots(self, label: str) -> List[Snapshot]:
        return list(self._snapshots.get(label, []))

    def inhaled(self, label: str) -> List[Instance]:
        return [s.instance for s in self._snapshots.get(label, []) if s.role == Role.INHALED]

    def exhaled(self, label: str) -> List[Instance]:
        return [s.instance for s in self._snapshots.get(label, []) if s.role == Role.EXHALED]

    def __contains__(self, label: str) -> bool:
        return label in self._snapshots

    def __iter__(self) -> Iterator[str]:
        return iter(self._snapshots)

    def __len__(self) -> int:
        return len(self._snapshots)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            label: [
                {
                    "instance": str(snapshot.instance),
                    "role": snapshot.role.value,
                }
                for snapshot in snapshots
            ]
            for label, snapshots in self._snapshots.items()
        }
