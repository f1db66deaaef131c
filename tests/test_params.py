import pytest

from seiscoherence.params import ParameterError, param, parse_args


def test_parse_args_collects_pairs():
    params = parse_args(["nx=5", "data_cube_file=cube.bin"])
    assert params == {"nx": "5", "data_cube_file": "cube.bin"}


def test_later_value_overrides_earlier():
    params = parse_args(["nx=5", "nx=7"])
    assert params["nx"] == "7"


def test_words_without_equals_are_ignored():
    params = parse_args(["verbose", "ny=3", "=orphan"])
    assert params == {"ny": "3"}


def test_value_may_contain_equals():
    params = parse_args(["expr=a=b"])
    assert params["expr"] == "a=b"


def test_parameter_file_is_read(tmp_path):
    parfile = tmp_path / "run.par"
    parfile.write_text("# settings\nnx=4 ny=6\nlayer_file='my layer.txt'\n", encoding="utf-8")
    params = parse_args([f"par={parfile}", "ny=8"])
    assert params["nx"] == "4"
    assert params["ny"] == "8"
    assert params["layer_file"] == "my layer.txt"


def test_command_line_before_parfile_is_overridden(tmp_path):
    parfile = tmp_path / "run.par"
    parfile.write_text("nt=9\n", encoding="utf-8")
    params = parse_args(["nt=2", f"par={parfile}"])
    assert params["nt"] == "9"


def test_missing_parameter_file_raises(tmp_path):
    with pytest.raises(ParameterError):
        parse_args([f"par={tmp_path / 'absent.par'}"])


def test_self_including_parameter_file_raises(tmp_path):
    parfile = tmp_path / "loop.par"
    parfile.write_text(f"par={parfile}\n", encoding="utf-8")
    with pytest.raises(ParameterError):
        parse_args([f"par={parfile}"])


def test_param_converts_value():
    assert param({"dx": "2.5"}, "dx", float, 10.0) == 2.5


def test_param_returns_default_when_absent():
    assert param({}, "dx", float, 10.0) == 10.0


def test_param_bad_value_raises_parameter_error():
    with pytest.raises(ParameterError):
        param({"nx": "many"}, "nx", int, 100)


def test_parameter_error_is_value_error():
    with pytest.raises(ValueError):
        param({"nx": "x"}, "nx", int, 1)