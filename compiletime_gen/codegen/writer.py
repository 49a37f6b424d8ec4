"""
Brace-balanced line writer for generated C++ source.

Indentation is cosmetic only, but it is part of the byte-stable output:
for each line, `net = count("{") - count("}")`; closing lines are dedented
before being written, opening lines indent everything after them.
"""

from __future__ import annotations

from typing import Iterable, List


class LineWriter:
    def __init__(self, *, indent: int = 2) -> None:
        self.indent = int(indent)
        self.depth = 0
        self.lines: List[str] = []

    def write(self, line: str) -> None:
        if line == "":
            self.blank()
            return
        net = line.count("{") - line.count("}")
        if net < 0:
            self.depth = max(0, self.depth + net)
        self.lines.append(" " * (self.indent * self.depth) + line)
        if net > 0:
            self.depth += net

    def write_all(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write(line)

    def blank(self) -> None:
        self.lines.append("")

    def text(self) -> str:
        return render_lines(self.lines)


def render_lines(lines: Iterable[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


__all__ = ["LineWriter", "render_lines"]
