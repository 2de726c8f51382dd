"""Path addressing -- locating a node in the deck tree with a flat list of ints.

A path is built root-to-leaf by whoever walks the tree (see
:mod:`deck_editor.editor.walker`) and consumed root-first by the tree
operations.  Internally :class:`TreePath` keeps the segments reversed so each
step of the descent is a cheap ``pop()`` from the tail.

Each node kind interprets the next segment itself:

* sequence containers (``Projectile``, ``StatusEffects``, ``PassiveCard``,
  ``Palette``) read an element index directly;
* multi-slot containers (``Cooldown``, ``MultiCast``) read a *type index*
  selecting the sequence, then an element index;
* single-slot nodes (advanced modifiers, ``LockToOwner``, ``Knockback``,
  gravity status effects) read the sentinel ``0``.

An empty path addresses the node itself.  A path that does not fit the tree
shape is a programming error and raises :class:`TreeContractError`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager

# Deck root slots
PALETTE_SLOT = 0
PASSIVE_SLOT = 1
COOLDOWN_OFFSET = 2

# Type indices of multi-slot containers
COOLDOWN_MODIFIERS = 0
COOLDOWN_ABILITIES = 1
MULTICAST_MODIFIERS = 0
MULTICAST_CARDS = 1

# Sentinel index of single-slot nodes
NESTED = 0


class TreeContractError(RuntimeError):
    """A path or item did not match the shape of the tree it was applied to."""


class TreePath:
    """Mutable path consumed root-first by the tree operations."""

    def __init__(self, segments: Iterable[int] = ()) -> None:
        self._stack: list[int] = list(segments)
        self._stack.reverse()

    def __repr__(self) -> str:
        return f"TreePath({self.segments()!r})"

    def __len__(self) -> int:
        return len(self._stack)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreePath):
            return NotImplemented
        return self._stack == other._stack

    def is_empty(self) -> bool:
        return not self._stack

    def segments(self) -> list[int]:
        """Remaining segments, root-first."""
        return self._stack[::-1]

    def copy(self) -> TreePath:
        return TreePath(self.segments())

    def peek(self) -> int:
        if not self._stack:
            raise TreeContractError("path exhausted")
        return self._stack[-1]

    def pop(self) -> int:
        """Consume and return the next segment."""
        if not self._stack:
            raise TreeContractError("path exhausted")
        return self._stack.pop()

    def pop_index(self, length: int) -> int:
        """Consume an element index, checking it against a sequence length."""
        index = self.pop()
        if not 0 <= index < length:
            raise TreeContractError(
                f"element index {index} out of range for sequence of {length}"
            )
        return index

    def expect(self, slot: int) -> None:
        """Consume a fixed slot index, failing on anything else."""
        index = self.pop()
        if index != slot:
            raise TreeContractError(f"expected slot {slot}, got {index}")

    def expect_end(self, node: object) -> None:
        """Fail if segments remain -- *node* is a leaf."""
        if self._stack:
            raise TreeContractError(
                f"cannot descend into leaf {type(node).__name__} "
                f"(remaining path {self.segments()})"
            )


def as_path(path: TreePath | Iterable[int]) -> TreePath:
    """Accept either a ready :class:`TreePath` or a root-first int sequence."""
    if isinstance(path, TreePath):
        return path
    return TreePath(path)


class PathBuilder:
    """Root-to-leaf path accumulator used while walking the tree."""

    def __init__(self, prefix: Iterable[int] = ()) -> None:
        self._segments: list[int] = list(prefix)

    @property
    def depth(self) -> int:
        return len(self._segments)

    def current(self) -> tuple[int, ...]:
        return tuple(self._segments)

    @contextmanager
    def child(self, *segments: int) -> Iterator[PathBuilder]:
        """Push *segments* for the duration of the ``with`` block."""
        self._segments.extend(segments)
        try:
            yield self
        finally:
            del self._segments[len(self._segments) - len(segments):]
