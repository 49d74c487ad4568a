"""Tree descriptions: the nested layout the materializer writes to disk.

A tree is built from three node kinds:

- ``Directory`` -- a mapping of single path segments to child nodes,
- ``File`` -- literal text written verbatim,
- ``Absent`` -- an entry that is skipped entirely.

Child order is preserved, so output and progress logs are deterministic.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class File:
    """A leaf file with literal content."""

    content: str


@dataclass(frozen=True)
class Absent:
    """Marker for an entry that produces no filesystem path."""


@dataclass(frozen=True)
class Directory:
    """A directory whose children are keyed by single path segments."""

    children: dict[str, "Node"] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name in self.children:
            _check_segment(name)

    def items(self) -> Iterator[tuple[str, "Node"]]:
        return iter(self.children.items())

    def __getitem__(self, name: str) -> "Node":
        return self.children[name]

    def __contains__(self, name: object) -> bool:
        return name in self.children

    def __len__(self) -> int:
        return len(self.children)


Node = Union[Directory, File, Absent]

ABSENT = Absent()


def from_mapping(mapping: Mapping[str, Any]) -> Directory:
    """Convert the plain nested form into a :class:`Directory`.

    ``dict`` values become directories, ``str`` values files and ``None``
    values :data:`ABSENT`.  Nodes that are already typed are kept as they are.

    Raises:
        TypeError: For any other value type.
        ValueError: For a name that is not a single path segment.
    """
    children: dict[str, Node] = {}
    for name, value in mapping.items():
        if isinstance(value, (Directory, File, Absent)):
            children[name] = value
        elif value is None:
            children[name] = ABSENT
        elif isinstance(value, str):
            children[name] = File(value)
        elif isinstance(value, Mapping):
            children[name] = from_mapping(value)
        else:
            raise TypeError(
                f"{name!r}: expected a mapping, str or None, got {type(value).__name__}"
            )
    return Directory(children)


def walk(tree: Directory, prefix: str = "") -> Iterator[tuple[str, Node]]:
    """Yield ``(relative_path, node)`` pairs in depth-first pre-order.

    Absent entries are skipped.  Paths use ``/`` as separator.
    """
    for name, node in tree.items():
        if isinstance(node, Absent):
            continue
        path = f"{prefix}{name}"
        yield path, node
        if isinstance(node, Directory):
            yield from walk(node, f"{path}/")


def _check_segment(name: str) -> None:
    if not isinstance(name, str) or not name:
        raise ValueError(f"tree entry names must be non-empty strings, got {name!r}")
    if name in (".", "..") or "/" in name or "\\" in name:
        raise ValueError(f"tree entry name must be a single path segment: {name!r}")
