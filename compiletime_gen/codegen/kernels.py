"""
Kernel-body synthesis (the `kernels.inc` artifact).

Each kernel becomes one command-group submission:

    device_queue.submit([&](cl::sycl::handler& cgh) {
      auto buffer_1_acc = buffer_1.get_access<s::access::mode::read_write>(cgh);
      cl::sycl::range<1> ndrange{rt_size};
      cgh.parallel_for<kernel_1>(ndrange, [=](cl::sycl::id<1> gid) {
        buffer_1_acc[gid] += capture_1 + capture_2;
        buffer_1_acc[gid] += buffer_1_acc[gid] + buffer_2_acc[gid];
        for(float i0 = 0; i0 < buffer_1_acc[gid]; ++i0) {
          buffer_2_acc[gid] = buffer_1_acc[gid] * buffer_2_acc[gid] + buffer_1_acc[gid];
        }
      }); // parallel_for
    }); // submit

Operand selection goes through an `OperandRotator` that is created fresh per
kernel: one `next()` per loop bound (in nest order), then per instruction one
`next()` per distinct placeholder in `OUT`, `IN1`, `IN2` order. The capture and
buffer accumulation preamble iterates the static name lists and does not
advance the rotator.

The generated code is included from a `run(size_t rt_size)` skeleton that
declares `device_queue` and `namespace s = cl::sycl;`.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from compiletime_gen.config import GenerationConfig
from compiletime_gen.ops import OperationTemplate, lookup

from .names import GeneratedNames
from .rotator import OperandRotator
from .writer import LineWriter


RT_SIZE = "rt_size"
GID = "gid"


def ndrange_args(dimensions: int) -> str:
    return ",".join([RT_SIZE] * int(dimensions))


def operand(accessor: str) -> str:
    return f"{accessor}[{GID}]"


def kernel_type_name(kernel_name: str, config: GenerationConfig) -> str:
    if config.templated:
        return f"{kernel_name}<{config.scalar_type}, {config.dimensions}>"
    return kernel_name


def buffer_declarations(config: GenerationConfig, names: GeneratedNames) -> List[str]:
    t, d = config.scalar_type, config.dimensions
    rng = ndrange_args(d)
    return [f"s::buffer<{t}, {d}> {bn}{{s::range<{d}>({rng})}};" for bn in names.buffer_names]


def capture_declarations(config: GenerationConfig, names: GeneratedNames) -> List[str]:
    return [f"{config.scalar_type} {cn}{{}};" for cn in names.capture_names]


def expand_instruction(template: OperationTemplate, rotator: OperandRotator) -> str:
    bindings: Dict[str, str] = {}
    for slot in template.placeholders:
        bindings[slot] = operand(rotator.next())
    return template.render(bindings)


class KernelBodySynthesizer:
    """Builds the unindented lines of one submission block per kernel."""

    def __init__(self, config: GenerationConfig, names: GeneratedNames) -> None:
        self.config = config
        self.names = names
        # Resolved up front; config construction already rejected unknown opcodes.
        self._mix: List[tuple[OperationTemplate, int]] = [(lookup(op), n) for op, n in config.instruction_mix]

    def new_rotator(self) -> OperandRotator:
        return OperandRotator(self.names.accessor_names)

    def synthesize(self, kernel_name: str, rotator: Optional[OperandRotator] = None) -> List[str]:
        cfg = self.config
        rotator = rotator if rotator is not None else self.new_rotator()
        d = cfg.dimensions
        lines: List[str] = ["device_queue.submit([&](cl::sycl::handler& cgh) {"]

        for bn, an in self.names.buffers:
            lines.append(f"auto {an} = {bn}.get_access<s::access::mode::read_write>(cgh);")

        lines.append(f"cl::sycl::range<{d}> ndrange{{{ndrange_args(d)}}};")
        lines.append(
            f"cgh.parallel_for<{kernel_type_name(kernel_name, cfg)}>(ndrange, [=](cl::sycl::id<{d}> {GID}) {{"
        )
        lines.extend(self._preamble())

        for i in range(cfg.loopnests):
            bound = operand(rotator.next())
            lines.append(f"for({cfg.scalar_type} i{i} = 0; i{i} < {bound}; ++i{i}) {{")

        for template, count in self._mix:
            for _ in range(count):
                lines.append(expand_instruction(template, rotator))

        lines.extend("}" for _ in range(cfg.loopnests))
        lines.append("}); // parallel_for")
        lines.append("}); // submit")
        lines.append("")
        return lines

    def _preamble(self) -> List[str]:
        acc0 = operand(self.names.accessor_names[0])
        out: List[str] = []
        if self.names.capture_names:
            out.append(f"{acc0} += {' + '.join(self.names.capture_names)};")
        all_accs = " + ".join(operand(an) for an in self.names.accessor_names)
        out.append(f"{acc0} += {all_accs};")
        return out


def emit_kernel_bodies(
    config: GenerationConfig,
    names: GeneratedNames,
    *,
    writer: Optional[LineWriter] = None,
) -> List[str]:
    writer = writer if writer is not None else LineWriter()

    writer.write_all(buffer_declarations(config, names))
    writer.blank()
    writer.write_all(capture_declarations(config, names))
    writer.blank()

    synth = KernelBodySynthesizer(config, names)
    # Blocks are built independently and merged in kernel order.
    blocks = [synth.synthesize(kn) for kn in names.kernel_names]
    for block in blocks:
        writer.write_all(block)
    return writer.lines


__all__ = [
    "RT_SIZE",
    "GID",
    "ndrange_args",
    "operand",
    "kernel_type_name",
    "buffer_declarations",
    "capture_declarations",
    "expand_instruction",
    "KernelBodySynthesizer",
    "emit_kernel_bodies",
]
