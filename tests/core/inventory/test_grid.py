"""Grid 점유 조회 / 불변식 테스트"""

from __future__ import annotations

import pytest

from burrow.core.inventory.grid import (
    PACK_DIMS,
    Grid,
    GridInvariantError,
    occupied_cells,
)
from burrow.core.item.models import Gear, PlacedItem


def _placed(name: str, row: int, col: int, width: int = 1, height: int = 1) -> PlacedItem:
    return PlacedItem(item=Gear(name=name, width=width, height=height), row=row, col=col)


class TestOccupiedCells:
    def test_single_cell(self) -> None:
        assert occupied_cells(1, 2, Gear(name="Coin")) == [(1, 2)]

    def test_wide_item(self) -> None:
        assert occupied_cells(0, 1, Gear(name="Tent", width=2)) == [(0, 1), (0, 2)]

    def test_tall_item(self) -> None:
        assert occupied_cells(0, 0, Gear(name="Pole", height=2)) == [(0, 0), (1, 0)]


class TestCanPlace:
    def test_empty_grid(self) -> None:
        grid = Grid.of(PACK_DIMS)
        assert grid.can_place(0, 0, Gear(name="Tent", width=2))

    def test_out_of_bounds(self) -> None:
        grid = Grid.of(PACK_DIMS)
        assert not grid.can_place(0, 2, Gear(name="Tent", width=2))
        assert not grid.can_place(1, 0, Gear(name="Pole", height=2))
        assert not grid.can_place(-1, 0, Gear(name="Coin"))

    def test_collision(self) -> None:
        grid = Grid(rows=2, cols=3, items=[_placed("Rope", 0, 1)])
        assert not grid.can_place(0, 0, Gear(name="Tent", width=2))
        assert grid.can_place(1, 0, Gear(name="Tent", width=2))

    def test_exclude_self(self) -> None:
        grid = Grid(rows=2, cols=3, items=[_placed("Tent", 0, 0, width=2)])
        assert not grid.can_place(0, 1, Gear(name="Tent", width=2))
        assert grid.can_place(0, 1, Gear(name="Tent", width=2), exclude_index=0)


class TestCellMap:
    def test_indices_per_cell(self) -> None:
        grid = Grid(
            rows=2,
            cols=3,
            items=[_placed("Tent", 0, 0, width=2), _placed("Rope", 1, 2)],
        )
        assert grid.build_cell_map() == [[0, 0, None], [None, None, 1]]

    def test_index_at(self) -> None:
        grid = Grid(rows=2, cols=3, items=[_placed("Pole", 0, 1, height=2)])
        assert grid.index_at(1, 1) == 0
        assert grid.index_at(0, 0) is None
        assert grid.index_at(5, 5) is None

    def test_map_is_rebuilt_after_change(self) -> None:
        grid = Grid(rows=1, cols=2, items=[_placed("Rope", 0, 0)])
        before = grid.build_cell_map()
        grid.items.pop()
        assert before == [[0, None]]
        assert grid.build_cell_map() == [[None, None]]


class TestInvariants:
    def test_valid_grid(self) -> None:
        grid = Grid(rows=2, cols=3, items=[_placed("Tent", 0, 0, width=2), _placed("Rope", 0, 2)])
        grid.check_invariants()

    def test_overlap_detected(self) -> None:
        grid = Grid(rows=2, cols=3, items=[_placed("Tent", 0, 0, width=2), _placed("Rope", 0, 1)])
        with pytest.raises(GridInvariantError):
            grid.check_invariants()

    def test_out_of_bounds_detected(self) -> None:
        grid = Grid(rows=1, cols=2, items=[_placed("Tent", 0, 1, width=2)])
        with pytest.raises(GridInvariantError):
            grid.check_invariants()


class TestRecords:
    def test_from_list_uses_given_dims(self) -> None:
        records = [{"item": {"name": "Rope", "type": "gear"}, "row": 1, "col": 2}]
        grid = Grid.from_list(PACK_DIMS, records)
        assert grid.dims == PACK_DIMS
        assert grid.get(0).item.name == "Rope"
        assert grid.to_list()[0]["row"] == 1

    def test_copy_is_independent_list(self) -> None:
        grid = Grid(rows=1, cols=2, items=[_placed("Rope", 0, 0)])
        work = grid.copy()
        work.items.clear()
        assert len(grid) == 1
