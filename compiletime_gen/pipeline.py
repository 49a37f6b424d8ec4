"""
Generation pipeline: validated config -> both artifacts -> sinks.

`generate()` is pure and produces everything in memory; `write_artifacts()` is
the only place that touches the filesystem. Both artifacts are complete
before the first byte is written, so a configuration error can never leave a
half-written pair behind.
"""

from __future__ import annotations

import errno
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from compiletime_gen.codegen import derive_names, emit_declarations, emit_kernel_bodies, render_lines
from compiletime_gen.config import GenerationConfig


DECL_INC_FILE = "kernel_declarations.inc"
KERNEL_INC_FILE = "kernels.inc"

OUT_DIR_ENV = "COMPILETIME_GEN_OUT_DIR"


@dataclass(frozen=True)
class ArtifactPaths:
    out_dir: Path = Path(".")
    decl_file: str = DECL_INC_FILE
    kernel_file: str = KERNEL_INC_FILE

    @classmethod
    def from_env(
        cls,
        out_dir: str | Path | None = None,
        *,
        decl_file: str = DECL_INC_FILE,
        kernel_file: str = KERNEL_INC_FILE,
    ) -> "ArtifactPaths":
        if out_dir is None:
            out_dir = os.getenv(OUT_DIR_ENV) or "."
        return cls(out_dir=Path(out_dir).expanduser(), decl_file=decl_file, kernel_file=kernel_file)

    @property
    def decl_path(self) -> Path:
        return self.out_dir / self.decl_file

    @property
    def kernel_path(self) -> Path:
        return self.out_dir / self.kernel_file


@dataclass
class GenerationResult:
    config: GenerationConfig
    declarations: List[str] = field(default_factory=list)
    kernels: List[str] = field(default_factory=list)

    def declarations_text(self) -> str:
        return render_lines(self.declarations)

    def kernels_text(self) -> str:
        return render_lines(self.kernels)

    def summary(self) -> Dict[str, Any]:
        return {
            "kernels": self.config.num_kernels,
            "declaration_lines": len(self.declarations),
            "kernel_lines": len(self.kernels),
            "kernel_bytes": len(self.kernels_text().encode("utf-8")),
        }


def generate(config: GenerationConfig) -> GenerationResult:
    names = derive_names(config)
    return GenerationResult(
        config=config,
        declarations=emit_declarations(config, names.kernel_names),
        kernels=emit_kernel_bodies(config, names),
    )


def write_to(result: GenerationResult, decl_sink: TextIO, kernel_sink: TextIO) -> None:
    decl_sink.write(result.declarations_text())
    kernel_sink.write(result.kernels_text())


def _stage(target: Path, text: str) -> Path:
    fd, tmp = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(text)
    return Path(tmp)


def write_artifacts(result: GenerationResult, paths: Optional[ArtifactPaths] = None) -> ArtifactPaths:
    """
    Overwrite both artifact files, or neither.

    Both texts are staged in temporary files next to their targets and moved
    into place with `os.replace` only once both are fully written. `OSError`
    propagates to the caller; staged files never outlive the call.
    """
    paths = paths or ArtifactPaths.from_env()
    decl_text = result.declarations_text()
    kernel_text = result.kernels_text()
    targets = (paths.decl_path, paths.kernel_path)
    for target in targets:
        target.parent.mkdir(parents=True, exist_ok=True)
        if target.is_dir():
            raise IsADirectoryError(errno.EISDIR, "artifact path is a directory", str(target))
    staged: List[Path] = []
    try:
        staged.append(_stage(paths.decl_path, decl_text))
        staged.append(_stage(paths.kernel_path, kernel_text))
        os.replace(staged[1], paths.kernel_path)
        os.replace(staged[0], paths.decl_path)
    finally:
        for tmp in staged:
            tmp.unlink(missing_ok=True)
    return paths


__all__ = [
    "DECL_INC_FILE",
    "KERNEL_INC_FILE",
    "OUT_DIR_ENV",
    "ArtifactPaths",
    "GenerationResult",
    "generate",
    "write_to",
    "write_artifacts",
]
