"""
Fresh identifier allocation.
"""

from typing import Dict, Iterable, Optional, Set


class Namespace:
    """
    Issues identifiers that are unique within one build.

    Identifiers never repeat, whatever base they were requested with,
    and never coincide with a reserved name.
    """

    def __init__(self, reserved: Iterable[str] = ()):
        self._counters: Dict[str, int] = {}
        self._taken: Set[str] = set(reserved)

    def fresh(self, base: str, hint: Optional[int] = None) -> str:
        """
        Return a fresh identifier derived from `base`.

        Args:
            base: Base name of the identifier
            hint: Lowest version to use; without a hint the bare base is
                returned if it is still available

        Returns:
            `base` or `base_<n>`, with `n` increasing per base
        """
        if hint is None and base not in self._taken:
            self._taken.add(base)
            return base

        counter = max(hint or 0, self._counters.get(base, 0))
        identifier = f"{base}_{counter}"
        while identifier in self._taken:
            counter += 1
            identifier = f"{base}_{counter}"

        self._counters[base] = counter + 1
        self._taken.add(identifier)
        return identifier

    def reserve(self, name: str) -> None:
        self._taken.add(name)

    def __contains__(self, name: str) -> bool:
        return name in self._taken
