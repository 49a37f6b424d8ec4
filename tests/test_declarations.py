from __future__ import annotations

from compiletime_gen.codegen import TEMPLATE_HEADER, declaration_line, derive_names, emit_declarations
from compiletime_gen.config import GenerationConfig


def test_plain_declarations_one_per_kernel():
    cfg = GenerationConfig(num_kernels=4)
    decls = emit_declarations(cfg, derive_names(cfg).kernel_names)
    assert decls == ["class kernel_1;", "class kernel_2;", "class kernel_3;", "class kernel_4;"]
    assert len(set(decls)) == 4


def test_templated_declarations_have_two_parameter_header():
    cfg = GenerationConfig(num_kernels=2, templated=True)
    decls = emit_declarations(cfg, derive_names(cfg).kernel_names)
    assert decls == [
        "template <typename _TT, int _TN> class kernel_1;",
        "template <typename _TT, int _TN> class kernel_2;",
    ]


def test_declaration_line():
    assert declaration_line("kernel_9") == "class kernel_9;"
    assert declaration_line("kernel_9", templated=True) == TEMPLATE_HEADER + "class kernel_9;"
