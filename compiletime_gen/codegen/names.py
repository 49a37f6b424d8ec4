"""
Deterministic identifier sets derived from configuration counts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from compiletime_gen.config import GenerationConfig


KERNEL_PREFIX = "kernel"
BUFFER_PREFIX = "buffer"
CAPTURE_PREFIX = "capture"
ACCESSOR_SUFFIX = "_acc"


def make_names(prefix: str, count: int) -> List[str]:
    return [f"{prefix}_{i}" for i in range(1, int(count) + 1)]


def accessor_name(buffer_name: str) -> str:
    return buffer_name + ACCESSOR_SUFFIX


@dataclass(frozen=True)
class GeneratedNames:
    kernel_names: tuple[str, ...]
    buffer_names: tuple[str, ...]
    accessor_names: tuple[str, ...]
    capture_names: tuple[str, ...]

    @property
    def buffers(self) -> tuple[tuple[str, str], ...]:
        """(buffer, accessor) pairs in declaration order."""
        return tuple(zip(self.buffer_names, self.accessor_names))


def derive_names(config: GenerationConfig) -> GeneratedNames:
    buffer_names = make_names(BUFFER_PREFIX, config.num_buffers)
    return GeneratedNames(
        kernel_names=tuple(make_names(KERNEL_PREFIX, config.num_kernels)),
        buffer_names=tuple(buffer_names),
        accessor_names=tuple(accessor_name(b) for b in buffer_names),
        capture_names=tuple(make_names(CAPTURE_PREFIX, config.num_captures)),
    )


__all__ = [
    "KERNEL_PREFIX",
    "BUFFER_PREFIX",
    "CAPTURE_PREFIX",
    "ACCESSOR_SUFFIX",
    "GeneratedNames",
    "make_names",
    "accessor_name",
    "derive_names",
]
