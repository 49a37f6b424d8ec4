"""CLI for the compile-time benchmark generator.

Generates SYCL programs of various size and structure for compile-time
measurements. The two artifacts are `#include`d by a skeleton translation unit:

    kernel_declarations.inc   forward declarations (one per kernel)
    kernels.inc               buffers, captures and one submission per kernel

Usage:
    compiletime-gen -k 16 -b 8 -l 2 -m sin:3,mad:10
    compiletime-gen -T -d 3 -t double --out-dir build/gen
    compiletime-gen --config shape.json -k 64 --dry-run
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from compiletime_gen.config import (
    ConfigurationError,
    GenerationConfig,
    MAX_BUFFERS,
    MAX_DIMENSIONS,
    SCALAR_TYPES,
    format_mix,
)
from compiletime_gen.pipeline import (
    DECL_INC_FILE,
    KERNEL_INC_FILE,
    OUT_DIR_ENV,
    ArtifactPaths,
    generate,
    write_artifacts,
)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="compiletime-gen",
        description="Generate synthetic SYCL kernels for compiler compile-time benchmarking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # 16 kernels, 8 buffers, two nested loops
  compiletime-gen -k 16 -b 8 -l 2 -m sin:3,mad:10

  # Templated 3-D double kernels into a build directory
  compiletime-gen -T -d 3 -t double --out-dir build/gen

Output directory defaults to ${OUT_DIR_ENV} or the current directory.
""",
    )
    # Defaults are None so explicit flags can be told apart from --config values.
    ap.add_argument("-k", "--num_kernels", type=int, default=None, metavar="NUM", help="create NUM kernels (default: 1)")
    ap.add_argument(
        "-b",
        "--num_buffers",
        type=int,
        default=None,
        metavar="NUM",
        help=f"create NUM buffers, clamped to [1, {MAX_BUFFERS}] (default: 2)",
    )
    ap.add_argument("-c", "--num_captures", type=int, default=None, metavar="NUM", help="use NUM captures (default: 4)")
    ap.add_argument(
        "-d",
        "--dimensions",
        type=int,
        default=None,
        metavar="DIM",
        help=f"select dimensionality, clamped to [1, {MAX_DIMENSIONS}] (default: 1)",
    )
    ap.add_argument("-l", "--loopnests", type=int, default=None, metavar="NUM", help="create NUM loop nests (default: 1)")
    ap.add_argument(
        "-t",
        "--type",
        dest="scalar_type",
        choices=list(SCALAR_TYPES),
        default=None,
        help="select data type (default: float)",
    )
    ap.add_argument("-m", "--mix", default=None, metavar="a,b,c", help="composition, e.g. sin:3,mad:10 (default: mad:10)")
    ap.add_argument(
        "-T",
        "--templated",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="generate templated kernels",
    )
    ap.add_argument("-v", "--verbose", action=argparse.BooleanOptionalAction, default=False, help="run verbosely")
    ap.add_argument("--config", type=Path, default=None, help="JSON configuration file; explicit flags override it")
    ap.add_argument("-o", "--out-dir", type=Path, default=None, help="output directory for the generated artifacts")
    ap.add_argument("--decl-file", default=DECL_INC_FILE, help=f"declarations artifact name (default: {DECL_INC_FILE})")
    ap.add_argument("--kernel-file", default=KERNEL_INC_FILE, help=f"kernel artifact name (default: {KERNEL_INC_FILE})")
    ap.add_argument("--dry-run", action="store_true", help="generate and summarize without writing files")
    return ap


_FLAG_TO_KEY = {
    "num_kernels": "num_kernels",
    "num_buffers": "num_buffers",
    "num_captures": "num_captures",
    "dimensions": "dimensions",
    "loopnests": "loopnests",
    "scalar_type": "scalar_type",
    "mix": "instruction_mix",
    "templated": "templated",
}

_KEY_TO_ALIAS = {"scalar_type": "type", "instruction_mix": "mix"}


def load_config_file(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Error: {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Error: {path} must contain a JSON object")
    return data


def config_from_args(args: argparse.Namespace) -> GenerationConfig:
    data: Dict[str, Any] = {}
    if args.config is not None:
        data.update(load_config_file(args.config))
    for flag, key in _FLAG_TO_KEY.items():
        v = getattr(args, flag)
        if v is not None:
            # An explicit flag overrides both spellings from the file.
            if key in _KEY_TO_ALIAS:
                data.pop(_KEY_TO_ALIAS[key], None)
            data[key] = v
    return GenerationConfig.from_json_dict(data)


def main(argv: Optional[List[str]] = None) -> None:
    ap = build_parser()
    args = ap.parse_args(argv)

    try:
        config = config_from_args(args)
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except OSError as e:
        print(f"Error: cannot read config: {e}", file=sys.stderr)
        raise SystemExit(1)

    if args.verbose:
        print(json.dumps([[op, n] for op, n in config.instruction_mix]))
        print(json.dumps(config.to_json_dict(), indent=2))

    result = generate(config)
    summary = result.summary()

    if args.dry_run:
        print(
            f"[dry-run] kernels={summary['kernels']} mix={format_mix(config.instruction_mix)} "
            f"decl_lines={summary['declaration_lines']} kernel_lines={summary['kernel_lines']} "
            f"kernel_bytes={summary['kernel_bytes']}"
        )
        return

    paths = ArtifactPaths.from_env(args.out_dir, decl_file=args.decl_file, kernel_file=args.kernel_file)
    try:
        write_artifacts(result, paths)
    except OSError as e:
        print(f"Error: failed to write artifacts: {e}", file=sys.stderr)
        raise SystemExit(1)

    if args.verbose:
        print(f"  {paths.decl_path}: {summary['declaration_lines']} lines")
        print(f"  {paths.kernel_path}: {summary['kernel_lines']} lines ({summary['kernel_bytes']} bytes)")


if __name__ == "__main__":
    main()
