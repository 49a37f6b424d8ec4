from __future__ import annotations

import json

import pytest

from compiletime_gen.cli import build_parser, main
from compiletime_gen.pipeline import DECL_INC_FILE, KERNEL_INC_FILE, OUT_DIR_ENV


def _read(tmp_path, name):
    return (tmp_path / name).read_text(encoding="utf-8")


def test_defaults_write_both_artifacts(tmp_path):
    main(["-o", str(tmp_path)])
    assert _read(tmp_path, DECL_INC_FILE) == "class kernel_1;\n"
    kernels = _read(tmp_path, KERNEL_INC_FILE)
    assert kernels.count("s::buffer<float, 1>") == 2
    assert kernels.count("float capture_") == 4
    assert kernels.count(" * ") == 10  # mad:10
    assert kernels.count("for(float i0") == 1


def test_short_flags(tmp_path):
    main(["-k", "3", "-b", "4", "-c", "0", "-d", "2", "-l", "2", "-t", "int", "-m", "sin:1,add:2", "-T", "-o", str(tmp_path)])
    decls = _read(tmp_path, DECL_INC_FILE).splitlines()
    assert decls == [f"template <typename _TT, int _TN> class kernel_{i};" for i in (1, 2, 3)]
    kernels = _read(tmp_path, KERNEL_INC_FILE)
    assert "cgh.parallel_for<kernel_3<int, 2>>" in kernels
    assert "capture" not in kernels
    assert kernels.count("for(int i1") == 3


def test_long_flags_and_negation(tmp_path):
    main(["--num_kernels", "2", "--templated", "--no-templated", "--type", "double", "--out-dir", str(tmp_path)])
    assert _read(tmp_path, DECL_INC_FILE) == "class kernel_1;\nclass kernel_2;\n"
    assert "s::buffer<double, 1>" in _read(tmp_path, KERNEL_INC_FILE)


def test_out_of_range_values_are_clamped(tmp_path):
    main(["-b", "0", "-d", "9", "-o", str(tmp_path)])
    kernels = _read(tmp_path, KERNEL_INC_FILE)
    assert "buffer_1{" in kernels
    assert "buffer_2" not in kernels
    assert "cl::sycl::range<3> ndrange{rt_size,rt_size,rt_size};" in kernels


def test_unknown_opcode_exits_before_writing(tmp_path, capsys):
    with pytest.raises(SystemExit) as ei:
        main(["-m", "mad:2,sine:3", "-o", str(tmp_path)])
    assert ei.value.code == 2
    err = capsys.readouterr().err
    assert "unknown opcode 'sine'" in err
    assert "Did you mean 'sin'?" in err
    assert not (tmp_path / DECL_INC_FILE).exists()
    assert not (tmp_path / KERNEL_INC_FILE).exists()


def test_malformed_mix_exits(tmp_path):
    with pytest.raises(SystemExit) as ei:
        main(["-m", "sin", "-o", str(tmp_path)])
    assert ei.value.code == 2
    assert list(tmp_path.iterdir()) == []


def test_invalid_type_rejected_by_parser():
    with pytest.raises(SystemExit) as ei:
        build_parser().parse_args(["-t", "half"])
    assert ei.value.code == 2


def test_dry_run_writes_nothing(tmp_path, capsys):
    main(["-k", "2", "--dry-run", "-o", str(tmp_path)])
    out = capsys.readouterr().out
    assert "[dry-run] kernels=2 mix=mad:10" in out
    assert list(tmp_path.iterdir()) == []


def test_verbose_prints_mix_and_paths(tmp_path, capsys):
    main(["-v", "-m", "cos:2", "-o", str(tmp_path)])
    out = capsys.readouterr().out
    assert '[["cos", 2]]' in out
    assert '"scalar_type": "float"' in out
    assert KERNEL_INC_FILE in out


def test_config_file_with_flag_override(tmp_path):
    cfg_path = tmp_path / "shape.json"
    cfg_path.write_text(json.dumps({"num_kernels": 5, "type": "double", "mix": "sqrt:1"}), encoding="utf-8")
    out_dir = tmp_path / "out"
    main(["--config", str(cfg_path), "-k", "2", "-m", "add:1", "-o", str(out_dir)])
    assert _read(out_dir, DECL_INC_FILE).count("class ") == 2
    kernels = _read(out_dir, KERNEL_INC_FILE)
    assert "s::buffer<double, 1>" in kernels
    assert "sqrt" not in kernels


def test_config_file_invalid_json(tmp_path, capsys):
    cfg_path = tmp_path / "bad.json"
    cfg_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SystemExit) as ei:
        main(["--config", str(cfg_path), "-o", str(tmp_path)])
    assert ei.value.code == 2
    assert "not valid JSON" in capsys.readouterr().err


def test_missing_config_file_is_io_error(tmp_path):
    with pytest.raises(SystemExit) as ei:
        main(["--config", str(tmp_path / "missing.json"), "-o", str(tmp_path)])
    assert ei.value.code == 1


def test_output_dir_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv(OUT_DIR_ENV, str(tmp_path))
    main(["-k", "1"])
    assert (tmp_path / DECL_INC_FILE).exists()


def test_write_failure_exit_code(tmp_path, capsys):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(SystemExit) as ei:
        main(["-o", str(blocker)])
    assert ei.value.code == 1
    assert "failed to write artifacts" in capsys.readouterr().err


def test_custom_artifact_names(tmp_path):
    main(["--decl-file", "decls.inc", "--kernel-file", "body.inc", "-o", str(tmp_path)])
    assert sorted(p.name for p in tmp_path.iterdir()) == ["body.inc", "decls.inc"]


def test_mix_is_echoed_only_when_verbose(tmp_path, capsys):
    main(["-m", "cos:2", "-o", str(tmp_path)])
    assert capsys.readouterr().out == ""


def test_config_file_conflicting_alias_exits(tmp_path, capsys):
    cfg_path = tmp_path / "shape.json"
    cfg_path.write_text(json.dumps({"mix": "sin:1", "instruction_mix": "cos:1"}), encoding="utf-8")
    out_dir = tmp_path / "out"
    with pytest.raises(SystemExit) as ei:
        main(["--config", str(cfg_path), "-o", str(out_dir)])
    assert ei.value.code == 2
    assert "conflicting values" in capsys.readouterr().err
    assert not out_dir.exists()


def test_flag_overrides_both_spellings_in_config_file(tmp_path):
    cfg_path = tmp_path / "shape.json"
    cfg_path.write_text(json.dumps({"type": "int", "scalar_type": "double"}), encoding="utf-8")
    out_dir = tmp_path / "out"
    main(["--config", str(cfg_path), "-t", "float", "-o", str(out_dir)])
    assert "s::buffer<float, 1>" in _read(out_dir, KERNEL_INC_FILE)
