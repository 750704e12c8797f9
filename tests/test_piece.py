import pytest

from brickfall.game import (
    DEFAULT_SHAPES,
    ActivePiece,
    FallResult,
    PieceController,
    PlayField,
    ShapeMatrix,
    SpawnBlocked,
)


O_SHAPE = ShapeMatrix.build(["11", "11"])
I_VERTICAL = ShapeMatrix.build(["0010", "0010", "0010", "0010"])


@pytest.mark.parametrize("max_size", [2, 3, 4, 5])
@pytest.mark.parametrize("extra_width", [0, 1, 2, 5])
@pytest.mark.parametrize("height", [1, 3, 13])
def test_spawn_never_collides_on_empty_field(max_size, extra_width, height):
    shapes = [ShapeMatrix.build(rows) for rows in DEFAULT_SHAPES]
    shapes.append(ShapeMatrix.build(["1" * max_size] * max_size))
    for shape in shapes:
        if shape.size > max_size:
            continue
        field = PlayField.build(shape.size + extra_width, height, max_size)
        controller = PieceController(field)
        piece = controller.try_spawn(shape)
        assert piece.y == field.height - 1
        assert not field.would_collide(shape, piece.x, piece.y)


def test_spawn_anchor_centers_by_parity():
    field = PlayField.build(10, 13, 5)
    controller = PieceController(field)
    assert controller.spawn_anchor(O_SHAPE) == (9, 17)
    assert controller.spawn_anchor(ShapeMatrix.build(["010", "111", "000"])) == (9, 17)
    assert controller.spawn_anchor(I_VERTICAL) == (8, 17)


def test_spawn_blocked_raises():
    field = PlayField.build(4, 4, 2)
    controller = PieceController(field)
    x, y = controller.spawn_anchor(O_SHAPE)
    field.grid[y, x] = True
    with pytest.raises(SpawnBlocked):
        controller.try_spawn(O_SHAPE)
    assert controller.piece is None


def test_move_left_against_wall_is_rejected():
    field = PlayField.build(4, 4, 2)
    controller = PieceController(field)
    controller.piece = ActivePiece(O_SHAPE, 2, 4)
    assert controller.try_move(-1) is False
    assert (controller.piece.x, controller.piece.y) == (2, 4)
    assert controller.try_move(1) is True
    assert controller.piece.x == 3


def test_move_rejects_bad_direction():
    controller = PieceController(PlayField.build(4, 4, 2))
    controller.try_spawn(O_SHAPE)
    with pytest.raises(ValueError):
        controller.try_move(2)


def test_rotate_into_wall_is_rejected():
    field = PlayField.build(10, 13, 5)
    controller = PieceController(field)
    # Vertical I hugging the left wall; horizontal would overlap columns 3 and 4.
    controller.piece = ActivePiece(I_VERTICAL, 3, 10)
    assert not field.would_collide(I_VERTICAL, 3, 10)
    assert controller.try_move(-1) is False
    assert controller.try_rotate_clockwise() is False
    assert controller.piece.shape == I_VERTICAL


def test_rotate_in_open_space():
    field = PlayField.build(10, 13, 5)
    controller = PieceController(field)
    controller.piece = ActivePiece(I_VERTICAL, 8, 10)
    assert controller.try_rotate_clockwise() is True
    assert controller.piece.shape == I_VERTICAL.rotated_clockwise()
    assert (controller.piece.x, controller.piece.y) == (8, 10)


def test_fall_until_locked_keeps_last_anchor():
    field = PlayField.build(4, 4, 2)
    controller = PieceController(field)
    piece = controller.try_spawn(O_SHAPE)
    results = []
    while True:
        result = controller.try_fall_one_row()
        results.append(result)
        if result is FallResult.LOCKED:
            break
    # O spawns at y=5 and rests with its bottom row on y=1
    assert results.count(FallResult.FELL) == 3
    assert piece.y == 2
    assert controller.try_fall_one_row() is FallResult.LOCKED
    assert piece.y == 2


def test_lock_commits_and_releases_piece():
    field = PlayField.build(4, 4, 2)
    controller = PieceController(field)
    controller.piece = ActivePiece(O_SHAPE, 2, 2)
    before = field.occupied_count()
    locked = controller.lock()
    assert field.occupied_count() == before + 4
    assert locked.cells() == [(2, 2), (3, 2), (2, 1), (3, 1)]
    assert controller.piece is None


def test_dropped_piece_ignores_moves_but_keeps_falling():
    field = PlayField.build(4, 4, 2)
    controller = PieceController(field)
    controller.try_spawn(O_SHAPE)
    assert controller.drop() is True
    assert controller.drop() is False
    assert controller.try_move(-1) is False
    assert controller.try_rotate_clockwise() is False
    assert controller.try_fall_one_row() is FallResult.FELL
