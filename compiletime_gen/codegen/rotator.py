"""
Per-kernel cyclic operand selector.

The rotator varies memory-access shape across synthetic kernels without any
randomness: the i-th call to `next()` (0-indexed) returns accessor `i mod N`.
A fresh rotator is created for every kernel and dropped once that kernel's
body is emitted, so no state leaks between kernels.
"""

from __future__ import annotations

from typing import Sequence


class OperandRotator:
    def __init__(self, accessor_names: Sequence[str]) -> None:
        if not accessor_names:
            raise ValueError("OperandRotator requires at least one accessor")
        self._names: tuple[str, ...] = tuple(accessor_names)
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    def __len__(self) -> int:
        return len(self._names)

    def next(self) -> str:
        name = self._names[self._index]
        self._index = (self._index + 1) % len(self._names)
        return name


__all__ = ["OperandRotator"]
