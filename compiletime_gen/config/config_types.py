"""
Generation configuration: immutable value, parsing helpers, and validation.

`GenerationConfig` is built once and never mutated. All checks (count ranges,
scalar type, every mix opcode against the op catalog) run at construction, so
configuration errors surface before any output line is produced.

Two construction paths exist:
  - `GenerationConfig(...)` validates strictly; out-of-range values raise.
  - `GenerationConfig.from_options(...)` / `from_json_dict(...)` first clamp
    `num_buffers` and `dimensions` into range (the CLI is lenient there), then
    validate.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Literal, Sequence, Tuple

from compiletime_gen.diagnostics import Diagnostic, did_you_mean
from compiletime_gen.ops import SUPPORTED_OPS, UnknownOperationError, lookup


__all__ = [
    "ConfigurationError",
    "ScalarType",
    "SCALAR_TYPES",
    "MAX_BUFFERS",
    "MAX_DIMENSIONS",
    "DEFAULT_MIX",
    "MixEntry",
    "GenerationConfig",
    "clamp",
    "parse_mix",
    "format_mix",
]


class ConfigurationError(ValueError):
    """Raised when a generation configuration is invalid."""


ScalarType = Literal["int", "float", "double"]

SCALAR_TYPES: tuple[str, ...] = ("int", "float", "double")

MAX_BUFFERS = 1024 * 16
MAX_DIMENSIONS = 3

MixEntry = Tuple[str, int]

DEFAULT_MIX: tuple[MixEntry, ...] = (("mad", 10),)


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(value)))


def parse_mix(text: str | Iterable[Any]) -> tuple[MixEntry, ...]:
    """
    Parse an instruction mix.

    Accepts the CLI form `"sin:3,mad:10"` or an already-split sequence of
    `"op:count"` strings / `[op, count]` pairs (the JSON form).
    """
    items: List[Any]
    if isinstance(text, str):
        items = text.split(",") if text.strip() else []
    else:
        items = list(text)

    out: List[MixEntry] = []
    for idx, item in enumerate(items):
        if isinstance(item, str):
            parts = item.strip().split(":")
            if len(parts) != 2:
                raise ConfigurationError(
                    Diagnostic(
                        message=f"instruction_mix[{idx}] is malformed",
                        snippet=item,
                        hints=["each entry must look like 'op:count', e.g. 'sin:3'"],
                    ).format()
                )
            op, raw_count = parts[0].strip(), parts[1].strip()
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            op, raw_count = item[0], item[1]
        else:
            raise ConfigurationError(
                Diagnostic(
                    message=f"instruction_mix[{idx}] must be 'op:count' or [op, count]",
                    snippet=repr(item),
                ).format()
            )
        out.append((str(op), _parse_count(raw_count, idx=idx, snippet=f"{op}:{raw_count}")))
    return tuple(out)


def _parse_count(raw: Any, *, idx: int, snippet: str) -> int:
    diag = Diagnostic(message=f"instruction_mix[{idx}] count must be an integer", snippet=snippet)
    if isinstance(raw, (bool, float)):
        raise ConfigurationError(diag.format())
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(diag.format()) from e


def format_mix(mix: Sequence[MixEntry]) -> str:
    return ",".join(f"{op}:{count}" for op, count in mix)


@dataclass(frozen=True)
class GenerationConfig:
    num_kernels: int = 1
    num_buffers: int = 2
    num_captures: int = 4
    dimensions: int = 1
    loopnests: int = 1
    scalar_type: ScalarType = "float"
    instruction_mix: tuple[MixEntry, ...] = field(default=DEFAULT_MIX)
    templated: bool = False

    def __post_init__(self) -> None:
        # Normalize "op:count" strings / list pairs into the canonical tuple form.
        object.__setattr__(self, "instruction_mix", parse_mix(self.instruction_mix))
        self.validate()

    def validate(self) -> None:
        _require_int(self.num_kernels, "num_kernels", lo=1)
        _require_int(self.num_buffers, "num_buffers", lo=1, hi=MAX_BUFFERS)
        _require_int(self.num_captures, "num_captures", lo=0)
        _require_int(self.dimensions, "dimensions", lo=1, hi=MAX_DIMENSIONS)
        _require_int(self.loopnests, "loopnests", lo=0)
        if self.scalar_type not in SCALAR_TYPES:
            raise ConfigurationError(
                Diagnostic(
                    message=f"scalar_type unsupported: {self.scalar_type!r}",
                    notes=did_you_mean(str(self.scalar_type), SCALAR_TYPES),
                    hints=[f"choose one of {list(SCALAR_TYPES)}"],
                ).format()
            )
        if not isinstance(self.templated, bool):
            raise ConfigurationError(f"Error: templated must be a bool, got {self.templated!r}")
        self._validate_mix()

    def _validate_mix(self) -> None:
        for idx, (op, count) in enumerate(self.instruction_mix):
            if not op:
                raise ConfigurationError(
                    Diagnostic(message=f"instruction_mix[{idx}] has an empty opcode", snippet=f"{op}:{count}").format()
                )
            if count < 0:
                raise ConfigurationError(
                    Diagnostic(
                        message=f"instruction_mix[{idx}] count must be >= 0, got {count}",
                        snippet=f"{op}:{count}",
                    ).format()
                )
            try:
                lookup(op)
            except UnknownOperationError as e:
                raise ConfigurationError(
                    Diagnostic(
                        message=f"instruction_mix[{idx}] references unknown opcode '{op}'",
                        snippet=f"{op}:{count}",
                        notes=did_you_mean(op, SUPPORTED_OPS),
                        hints=[f"supported opcodes are {sorted(SUPPORTED_OPS)}"],
                    ).format()
                ) from e

    @classmethod
    def from_options(
        cls,
        *,
        num_kernels: int = 1,
        num_buffers: int = 2,
        num_captures: int = 4,
        dimensions: int = 1,
        loopnests: int = 1,
        scalar_type: str = "float",
        instruction_mix: str | Iterable[Any] = DEFAULT_MIX,
        templated: bool = False,
    ) -> "GenerationConfig":
        """Lenient constructor: coerces counts, clamps buffer count and dimensionality, then validates."""
        return cls(
            num_kernels=_coerce_int(num_kernels, "num_kernels"),
            num_buffers=clamp(_coerce_int(num_buffers, "num_buffers"), 1, MAX_BUFFERS),
            num_captures=_coerce_int(num_captures, "num_captures"),
            dimensions=clamp(_coerce_int(dimensions, "dimensions"), 1, MAX_DIMENSIONS),
            loopnests=_coerce_int(loopnests, "loopnests"),
            scalar_type=scalar_type,  # type: ignore[arg-type]
            instruction_mix=parse_mix(instruction_mix),
            templated=templated,
        )

    @classmethod
    def from_json_dict(cls, data: Dict[str, Any]) -> "GenerationConfig":
        """
        Build a config from a decoded JSON object.

        `type` and `mix` are accepted as aliases of `scalar_type` and
        `instruction_mix`. Giving both spellings with different values is a
        `ConfigurationError`.
        """
        if not isinstance(data, dict):
            raise ConfigurationError("Error: configuration must be a JSON object")
        known = set(_JSON_KEYS) | {alias for alias, _ in _JSON_ALIASES}
        unknown = sorted(k for k in data if k not in known)
        if unknown:
            notes: List[str] = []
            for k in unknown:
                notes.extend(did_you_mean(k, _JSON_KEYS))
            raise ConfigurationError(
                Diagnostic(
                    message=f"unknown configuration keys: {unknown}",
                    notes=notes,
                    hints=[f"valid keys are {list(_JSON_KEYS)}"],
                ).format()
            )
        kwargs: Dict[str, Any] = {}
        for key in _JSON_KEYS:
            if key in data:
                kwargs[key] = data[key]
        for alias, key in _JSON_ALIASES:
            if alias not in data:
                continue
            if key in data and data[key] != data[alias]:
                raise ConfigurationError(
                    Diagnostic(
                        message=f"conflicting values for '{key}' and its alias '{alias}'",
                        snippet=f"{key}={data[key]!r}, {alias}={data[alias]!r}",
                        hints=[f"drop one of '{key}' or '{alias}'"],
                    ).format()
                )
            kwargs[key] = data[alias]
        return cls.from_options(**kwargs)

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "num_kernels": self.num_kernels,
            "num_buffers": self.num_buffers,
            "num_captures": self.num_captures,
            "dimensions": self.dimensions,
            "loopnests": self.loopnests,
            "scalar_type": self.scalar_type,
            "instruction_mix": [[op, count] for op, count in self.instruction_mix],
            "templated": self.templated,
        }


_JSON_KEYS: tuple[str, ...] = (
    "num_kernels",
    "num_buffers",
    "num_captures",
    "dimensions",
    "loopnests",
    "scalar_type",
    "instruction_mix",
    "templated",
)

_JSON_ALIASES: tuple[tuple[str, str], ...] = (("type", "scalar_type"), ("mix", "instruction_mix"))


def _coerce_int(v: Any, name: str) -> int:
    if isinstance(v, bool):
        raise ConfigurationError(f"Error: {name} must be an integer, got {v!r}")
    if isinstance(v, float) and not v.is_integer():
        raise ConfigurationError(f"Error: {name} must be an integer, got {v!r}")
    try:
        return int(v)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Error: {name} must be an integer, got {v!r}") from e


def _require_int(v: Any, name: str, *, lo: int, hi: int | None = None) -> None:
    if isinstance(v, bool) or not isinstance(v, int):
        raise ConfigurationError(f"Error: {name} must be an integer, got {v!r}")
    if v < lo or (hi is not None and v > hi):
        bounds = f"[{lo}, {hi}]" if hi is not None else f">= {lo}"
        raise ConfigurationError(f"Error: {name} must be {bounds}, got {v}")
