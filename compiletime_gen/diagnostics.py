"""
Diagnostic helpers for configuration errors.

Messages are formatted Clang-like so CLI users get actionable output:

    Error: instruction_mix[1] references unknown opcode 'sine'
      -> sine:3
    Note: Did you mean 'sin'?
    Hint: supported opcodes are ['add', 'cos', 'mad', 'sin', 'sqrt']
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from typing import Iterable, List, Optional


@dataclass
class Diagnostic:
    message: str
    snippet: Optional[str] = None
    notes: List[str] = field(default_factory=list)
    hints: List[str] = field(default_factory=list)

    def format(self) -> str:
        lines: List[str] = [f"Error: {self.message}"]
        if self.snippet:
            lines.append(f"  -> {self.snippet}")
        for n in self.notes:
            lines.append(f"Note: {n}")
        for h in self.hints:
            lines.append(f"Hint: {h}")
        return "\n".join(lines)


def closest_match(name: str, candidates: Iterable[str], *, n: int = 1) -> List[str]:
    return list(difflib.get_close_matches(str(name), sorted(candidates), n=n, cutoff=0.6))


def did_you_mean(name: str, candidates: Iterable[str]) -> List[str]:
    sugg = closest_match(name, candidates, n=1)
    if not sugg:
        return []
    return [f"Did you mean '{sugg[0]}'?"]


__all__ = ["Diagnostic", "closest_match", "did_you_mean"]
