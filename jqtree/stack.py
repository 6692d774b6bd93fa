"""Backtracking stacks used by the query evaluator.

Popped entries are not discarded while a saved state still refers to them:
``save`` raises a floor below which pushes never overwrite, so a later
``restore`` brings back the stack exactly as it was saved.
"""

from __future__ import annotations

from typing import Any, NamedTuple


class _Block(NamedTuple):
    value: Any
    next: int


class Stack:
    """Value stack with backtracking."""

    def __init__(self) -> None:
        self._data: list[_Block] = []
        self._index = -1
        self._limit = -1

    def push(self, v: Any) -> None:
        """Push ``v`` on the stack."""
        block = _Block(v, self._index)
        self._index = max(self._index, self._limit) + 1
        if self._index < len(self._data):
            self._data[self._index] = block
        else:
            self._data.append(block)

    def pop(self) -> Any:
        """Remove and return the top value."""
        if self._index < 0:
            raise IndexError("pop from empty stack")
        block = self._data[self._index]
        self._index = block.next
        return block.value

    def top(self) -> Any:
        """Return the top value without removing it."""
        if self._index < 0:
            raise IndexError("top of empty stack")
        return self._data[self._index].value

    def empty(self) -> bool:
        """Whether the stack holds no values."""
        return self._index < 0

    def save(self) -> tuple[int, int]:
        """Return a restore point and protect the current entries."""
        saved = (self._index, self._limit)
        if self._index > self._limit:
            self._limit = self._index
        return saved

    def restore(self, index: int, limit: int) -> None:
        """Return to a point previously returned by ``save``."""
        self._index, self._limit = index, limit


class ScopeStack:
    """Stack of variable scopes with backtracking."""

    def __init__(self) -> None:
        self._data: list[_Block] = []
        self._index = -1
        self._limit = -1

    def push(self, v: Any) -> None:
        """Push the scope ``v`` on the stack."""
        block = _Block(v, self._index)
        self._index = max(self._index, self._limit) + 1
        if self._index < len(self._data):
            self._data[self._index] = block
        else:
            self._data.append(block)

    def pop(self) -> Any:
        """Remove and return the top scope."""
        if self._index < 0:
            raise IndexError("pop from empty stack")
        block = self._data[self._index]
        self._index = block.next
        return block.value

    def empty(self) -> bool:
        """Whether the stack holds no scopes."""
        return self._index < 0

    def save(self) -> tuple[int, int]:
        """Return a restore point and protect the current entries."""
        saved = (self._index, self._limit)
        if self._index > self._limit:
            self._limit = self._index
        return saved

    def restore(self, index: int, limit: int) -> None:
        """Return to a point previously returned by ``save``."""
        self._index, self._limit = index, limit