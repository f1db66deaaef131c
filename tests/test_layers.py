import numpy as np
import pytest

from seiscoherence.layers import (
    generator_main,
    grid_layer_result,
    interpolation_main,
    layer_points,
    write_layer_file,
)
from seiscoherence.subcube import read_layer_points


def _write_results(path, rows):
    path.write_text("".join(f"{i},{j},{k},{v}\n" for i, j, k, v in rows), encoding="utf-8")


def test_layer_points_across_t():
    points = layer_points(3, 4, 5, 2, 1)
    assert len(points) == 3 * 4
    assert all(p[2] == 1 for p in points)
    assert points[0] == (0, 0, 1)
    assert points == sorted(points)


def test_layer_points_across_x_and_y():
    across_x = layer_points(3, 4, 5, 0, 2)
    assert len(across_x) == 4 * 5
    assert {p[0] for p in across_x} == {2}
    across_y = layer_points(3, 4, 5, 1, 3)
    assert len(across_y) == 3 * 5
    assert {p[1] for p in across_y} == {3}


@pytest.mark.parametrize("direction,cut", [(3, 0), (-1, 0), (0, 3), (2, 5), (1, -1)])
def test_layer_points_rejects_bad_input(direction, cut):
    with pytest.raises(ValueError):
        layer_points(3, 4, 5, direction, cut)


def test_layer_file_round_trip(tmp_path):
    points = layer_points(2, 3, 4, 2, 2)
    path = tmp_path / "layer.txt"
    write_layer_file(path, points)
    assert path.read_text(encoding="utf-8").splitlines()[0] == str(len(points))
    assert read_layer_points(path) == points


def test_grid_layer_result_axes(tmp_path):
    path = tmp_path / "result.txt"
    rows = [(i, j, 7, i * 10 + j) for i in range(2) for j in range(3)]
    _write_results(path, rows)
    grid = grid_layer_result(path, 2, 3, 1, 2)
    for i, j, _, value in rows:
        assert grid[i, j] == value
    transposed = grid_layer_result(path, 3, 2, 2, 1)
    assert np.array_equal(transposed, grid.T)


def test_grid_layer_result_uses_t(tmp_path):
    path = tmp_path / "result.txt"
    rows = [(i, 0, k, i + 0.5 * k) for i in range(2) for k in range(2)]
    _write_results(path, rows)
    grid = grid_layer_result(path, 2, 2, 1, 3)
    for i, _, k, value in rows:
        assert grid[i, k] == pytest.approx(value)


def test_grid_layer_result_errors(tmp_path):
    path = tmp_path / "result.txt"
    _write_results(path, [(0, 0, 0, 1.0)])
    with pytest.raises(ValueError):
        grid_layer_result(path, 1, 1, 1, 1)
    with pytest.raises(ValueError):
        grid_layer_result(path, 2, 2, 1, 2)
    _write_results(path, [(5, 0, 0, 1.0)])
    with pytest.raises(ValueError):
        grid_layer_result(path, 1, 1, 1, 2)


def test_generator_main_writes_file(tmp_path):
    out = tmp_path / "layer.txt"
    code = generator_main(["nx=2", "ny=3", "nt=4", "direction=0", "cut_point=1",
                           f"layer_fname={out}"])
    assert code == 0
    assert read_layer_points(out) == layer_points(2, 3, 4, 0, 1)


def test_generator_main_reports_error(tmp_path):
    out = tmp_path / "layer.txt"
    assert generator_main(["nx=2", "direction=0", "cut_point=2", f"layer_fname={out}"]) == 1


def test_interpolation_main_writes_profile(tmp_path):
    source = tmp_path / "result.txt"
    target = tmp_path / "profile.bin"
    rows = [(i, j, 0, float(i - j)) for i in range(2) for j in range(2)]
    _write_results(source, rows)
    code = interpolation_main(["n1=2", "n2=2", f"layer_fname={source}",
                               f"layer_interplatation_fname={target}"])
    assert code == 0
    data = np.fromfile(target, dtype=np.float32).reshape(2, 2)
    assert np.array_equal(data, grid_layer_result(source, 2, 2))


def test_mains_print_help_without_arguments(capsys):
    assert generator_main([]) == 0
    assert "Usage" in capsys.readouterr().out
    assert interpolation_main([]) == 0
    assert "layer_interplatation_fname" in capsys.readouterr().out