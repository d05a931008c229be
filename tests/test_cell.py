import pytest

from rixel.model.cell import CellPosition, GridExtent


def test_index_is_unique_and_decodes_back() -> None:
    extent = GridExtent(4, 3)
    indices = set()
    for y in range(extent.height):
        for x in range(extent.width):
            index = CellPosition(x, y).to_index(extent)
            assert 0 <= index < extent.cell_count
            assert CellPosition.from_index(index, extent) == CellPosition(x, y)
            indices.add(index)
    assert len(indices) == extent.cell_count


def test_to_index_is_row_major() -> None:
    extent = GridExtent(5, 2)
    assert CellPosition(0, 0).to_index(extent) == 0
    assert CellPosition(4, 0).to_index(extent) == 4
    assert CellPosition(0, 1).to_index(extent) == 5
    assert CellPosition(3, 1).to_index(extent) == 8


def test_within_bounds() -> None:
    extent = GridExtent(3, 2)
    assert CellPosition(0, 0).within_bounds(extent)
    assert CellPosition(2, 1).within_bounds(extent)
    assert not CellPosition(3, 0).within_bounds(extent)
    assert not CellPosition(0, 2).within_bounds(extent)
    assert not CellPosition(7, 9).within_bounds(extent)


def test_extent_rejects_empty_size() -> None:
    with pytest.raises(ValueError):
        GridExtent(0, 3)
    with pytest.raises(ValueError):
        GridExtent(3, -1)


def test_position_rejects_negative_coordinates() -> None:
    with pytest.raises(ValueError):
        CellPosition(-1, 0)


def test_positions_iterates_row_major() -> None:
    extent = GridExtent(2, 2)
    assert [p.as_tuple() for p in extent.positions()] == [(0, 0), (1, 0), (0, 1), (1, 1)]


def test_cell_size_uses_integer_division() -> None:
    extent = GridExtent(30, 30, window_width=1280, window_height=1280)
    assert extent.cell_size() == (42.0, 42.0)


def test_screen_position_centres_grid_and_flips_rows() -> None:
    extent = GridExtent(4, 2, window_width=400, window_height=200)
    # cell size is 100 x 100
    assert CellPosition(0, 0).to_screen_position(extent) == (-150.0, 50.0)
    assert CellPosition(3, 0).to_screen_position(extent) == (150.0, 50.0)
    assert CellPosition(0, 1).to_screen_position(extent) == (-150.0, -50.0)


def test_screen_rows_move_down_as_y_grows() -> None:
    extent = GridExtent(5, 5, window_width=500, window_height=500)
    ys = [CellPosition(2, y).to_screen_position(extent)[1] for y in range(5)]
    assert ys == sorted(ys, reverse=True)
    # centre cell of an odd grid sits on the origin
    assert CellPosition(2, 2).to_screen_position(extent) == (0.0, 0.0)


def test_extent_rejects_window_smaller_than_grid() -> None:
    with pytest.raises(ValueError):
        GridExtent(5, 5, window_width=3, window_height=3)
    with pytest.raises(ValueError):
        GridExtent(2, 2, window_width=100, window_height=0)


def test_smallest_window_gives_one_pixel_cells() -> None:
    extent = GridExtent(5, 4, window_width=5, window_height=4)
    assert extent.cell_size() == (1.0, 1.0)
