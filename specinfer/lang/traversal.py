"""
Generic traversal over language nodes.
"""

import dataclasses
from typing import Any, Callable, Dict, Iterator, List, Type as PyType, TypeVar

from .expressions import Expression, LocalVar
from .statements import Stmt

T = TypeVar("T")


def _is_node(value: Any) -> bool:
    return isinstance(value, (Expression, Stmt))


def children(node: Any) -> Iterator[Any]:
    """Yield the direct sub-nodes of a node, in field order."""
    if not dataclasses.is_dataclass(node):
        return
    for fld in dataclasses.fields(node):
        value = getattr(node, fld.name)
        if _is_node(value):
            yield value
        elif isinstance(value, (list, tuple)):
            for item in value:
                if _is_node(item):
                    yield item


def walk(node: Any) -> Iterator[Any]:
    """Yield a node and all of its descendants in pre-order."""
    yield node
    for child in children(node):
        yield from walk(child)


def deep_collect(node: Any, kind: PyType[T]) -> List[T]:
    """Collect every descendant of the given kind (duplicates included)."""
    return [each for each in walk(node) if isinstance(each, kind)]


def collect_variables(node: Any) -> List[LocalVar]:
    """Distinct local variables occurring in a node, by first occurrence."""
    seen = set()
    variables = []
    for variable in deep_collect(node, LocalVar):
        if variable not in seen:
            seen.add(variable)
            variables.append(variable)
    return variables


def transform(expression: Expression, rewrite: Callable[[Expression], Any]) -> Expression:
    """
    Rebuild an expression bottom-up.

    `rewrite` is tried on every node first; if it returns None the node's
    children are transformed and the node is rebuilt around them.
    """
    replaced = rewrite(expression)
    if replaced is not None:
        return replaced

    changes = {}
    for fld in dataclasses.fields(expression):
        value = getattr(expression, fld.name)
        if isinstance(value, Expression):
            new_value = transform(value, rewrite)
        elif isinstance(value, tuple):
            new_value = tuple(
                transform(item, rewrite) if isinstance(item, Expression) else item
                for item in value
            )
        else:
            continue
        if new_value != value:
            changes[fld.name] = new_value

    if not changes:
        return expression
    return dataclasses.replace(expression, **changes)


def substitute(expression: Expression, mapping: Dict[str, Expression]) -> Expression:
    """Replace variables by name."""
    def rewrite(node: Expression):
        if isinstance(node, LocalVar):
            return mapping.get(node.name)
        return None

    return transform(expression, rewrite)
