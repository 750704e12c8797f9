import itertools

import numpy as np
import pytest

from brickfall.game import ConfigError, PlayField, ShapeMatrix, print_field


O_SHAPE = ShapeMatrix.build(["11", "11"])
T_SHAPE = ShapeMatrix.build(["010", "111", "000"])


def test_build_dimensions_and_border():
    field = PlayField.build(4, 4, 2)
    assert field.width == 8
    assert field.height == 6
    for y, x in itertools.product(range(field.height), range(field.width)):
        assert field.is_occupied(x, y) == field.is_border(x, y)


@pytest.mark.parametrize("dims", [(0, 4, 2), (4, 0, 2), (-1, 4, 2), (4, 4, 0)])
def test_build_rejects_non_positive_dimensions(dims):
    with pytest.raises(ConfigError):
        PlayField.build(*dims)


def test_would_collide_uses_vertical_flip():
    field = PlayField.build(4, 4, 2)
    # T at (2, 3): top cell at (3, 3), bottom row at y=2
    assert not field.would_collide(T_SHAPE, 2, 3)
    field.grid[3, 3] = True
    assert field.would_collide(T_SHAPE, 2, 3)
    field.grid[3, 3] = False
    field.grid[2, 4] = True
    assert field.would_collide(T_SHAPE, 2, 3)


def test_would_collide_with_walls_and_floor():
    field = PlayField.build(4, 4, 2)
    assert field.would_collide(O_SHAPE, 1, 3)   # left wall
    assert field.would_collide(O_SHAPE, 5, 3)   # right wall
    assert field.would_collide(O_SHAPE, 2, 1)   # floor
    assert not field.would_collide(O_SHAPE, 2, 2)


@pytest.mark.parametrize("pos", [(-3, 3), (100, 3), (3, 100), (3, -5)])
def test_would_collide_out_of_range_is_rejected(pos):
    field = PlayField.build(4, 4, 2)
    assert field.would_collide(O_SHAPE, *pos)


def test_commit_adds_exactly_the_piece_cells():
    field = PlayField.build(6, 6, 3)
    before = field.occupied_count()
    written = field.commit(T_SHAPE, 4, 3)
    assert written == T_SHAPE.cell_count
    assert field.occupied_count() == before + T_SHAPE.cell_count
    assert field.is_occupied(5, 3)
    assert field.is_occupied(4, 2) and field.is_occupied(5, 2) and field.is_occupied(6, 2)


def test_commit_outside_grid_raises():
    field = PlayField.build(4, 4, 2)
    with pytest.raises(ValueError):
        field.commit(O_SHAPE, 3, 100)


def test_is_row_full_ignores_walls():
    field = PlayField.build(4, 4, 2)
    assert field.is_row_full(0)
    assert not field.is_row_full(1)
    field.grid[1, 2:5] = True
    assert not field.is_row_full(1)
    field.grid[1, 5] = True
    assert field.is_row_full(1)


def test_shift_rows_down_deletes_row_and_clears_top():
    field = PlayField.build(4, 4, 2)
    field.grid[1, 2:6] = True
    field.grid[2, 3] = True
    field.grid[5, 4] = True
    field.shift_rows_down(1)
    assert field.is_occupied(3, 1)
    assert not field.is_occupied(2, 1)
    assert field.is_occupied(4, 4)
    assert not np.any(field.grid[5, field.playable_columns])
    # Walls and floor untouched
    assert np.all(field.grid[:, :2]) and np.all(field.grid[:, 6:])
    assert np.all(field.grid[0])


def test_snapshot_is_a_copy():
    field = PlayField.build(4, 4, 2)
    full = field.snapshot()
    inner = field.snapshot(include_border=False)
    assert full.shape == (6, 8)
    assert inner.shape == (5, 4)
    assert not np.any(inner)
    full[3, 3] = True
    assert not field.is_occupied(3, 3)


def test_to_text_prints_top_row_first(capsys):
    field = PlayField.build(2, 2, 2)
    print_field(field)
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "110011"
    assert lines[-1] == "111111"


def test_copy_is_independent():
    field = PlayField.build(4, 4, 2)
    clone = field.copy()
    clone.commit(O_SHAPE, 2, 2)
    assert clone.occupied_count() == field.occupied_count() + 4
    assert np.array_equal(field.snapshot(include_border=False), np.zeros((5, 4), dtype=bool))
