"""Collect payload references from tree-shaped entry bodies."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from contentstream.domain.model import Entry, JSONValue

type ReferencePredicate = Callable[[object], bool]


def walk(value: JSONValue) -> Iterator[object]:
    """Yield every scalar leaf of ``value`` depth-first.

    Mappings are visited in insertion order (values only), sequences in index
    order. Strings and bytes are leaves.
    """

    if isinstance(value, Mapping):
        for child in value.values():
            yield from walk(child)
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        for child in value:
            yield from walk(child)
    else:
        yield value


def extract_references(value: JSONValue, predicate: ReferencePredicate) -> tuple[str, ...]:
    """Return the distinct leaves of ``value`` accepted by ``predicate``, first seen first."""

    found: dict[str, None] = {}
    for leaf in walk(value):
        if predicate(leaf):
            found.setdefault(str(leaf), None)
    return tuple(found)


class ReferenceExtractor:
    """Extract references matching any of a set of predicates."""

    def __init__(self, predicates: Iterable[ReferencePredicate]) -> None:
        self._predicates = tuple(predicates)

    def _matches(self, leaf: object) -> bool:
        return any(predicate(leaf) for predicate in self._predicates)

    def __call__(self, value: JSONValue) -> tuple[str, ...]:
        if not self._predicates:
            return ()
        return extract_references(value, self._matches)

    def entry_references(self, entry: Entry) -> tuple[str, ...]:
        return self(entry.content)
