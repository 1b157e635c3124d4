"""Grid 모델 & 점유 조회

셀 맵은 캐시하지 않는다. 컨테이너를 변경한 뒤에는 이전 셀 맵을 버리고 다시 만든다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple, Optional

from burrow.core.item.models import Item, PlacedItem
from burrow.core.logging import get_logger

logger = get_logger(__name__)


class GridDims(NamedTuple):
    rows: int
    cols: int


# 역할별 고정 크기 (설정 불가)
PAW_DIMS = GridDims(1, 2)
BODY_DIMS = GridDims(1, 2)
PACK_DIMS = GridDims(2, 3)
HIRELING_PACK_DIMS = GridDims(1, 2)


class GridName(str, Enum):
    PAW = "paw"
    BODY = "body"
    PACK = "pack"


class InventoryError(RuntimeError):
    """인벤토리 엔진 오류 공통 상위 타입"""


class GridInvariantError(InventoryError):
    """겹침 또는 범위 밖 셀 발견. 엔진을 우회한 직접 변경의 결과 (프로그래밍 오류)."""


CellMap = list[list[Optional[int]]]


def occupied_cells(row: int, col: int, item: Item) -> list[tuple[int, int]]:
    """anchor(row, col)에 놓인 item이 차지하는 셀 목록"""
    return [(row + r, col + c) for r in range(item.height) for c in range(item.width)]


@dataclass
class Grid:
    """rows x cols 고정 크기 컨테이너"""

    rows: int
    cols: int
    items: list[PlacedItem] = field(default_factory=list)

    @classmethod
    def of(cls, dims: GridDims) -> Grid:
        return cls(rows=dims.rows, cols=dims.cols)

    @property
    def dims(self) -> GridDims:
        return GridDims(self.rows, self.cols)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def can_place(
        self,
        row: int,
        col: int,
        item: Item,
        exclude_index: Optional[int] = None,
    ) -> bool:
        """범위 + 충돌 검사.

        exclude_index: 이미 배치된 아이템을 자기 자신과 비교하지 않도록 제외할 인덱스.
        """
        cells = occupied_cells(row, col, item)

        for r, c in cells:
            if not self.in_bounds(r, c):
                return False

        wanted = set(cells)
        for i, existing in enumerate(self.items):
            if i == exclude_index:
                continue
            if wanted.intersection(existing.cells()):
                return False

        return True

    def build_cell_map(self) -> CellMap:
        """각 셀 → 점유 아이템 인덱스 (없으면 None). 매번 새로 만든다."""
        cell_map: CellMap = [[None] * self.cols for _ in range(self.rows)]
        for i, placed in enumerate(self.items):
            for r, c in placed.cells():
                if self.in_bounds(r, c):
                    cell_map[r][c] = i
        return cell_map

    def index_at(self, row: int, col: int) -> Optional[int]:
        """셀을 점유한 아이템 인덱스. 범위 밖이거나 비어 있으면 None."""
        if not self.in_bounds(row, col):
            return None
        return self.build_cell_map()[row][col]

    def get(self, index: int) -> Optional[PlacedItem]:
        if 0 <= index < len(self.items):
            return self.items[index]
        return None

    def check_invariants(self) -> None:
        """겹침 / 범위 위반 시 GridInvariantError."""
        seen: dict[tuple[int, int], int] = {}
        for i, placed in enumerate(self.items):
            for cell in placed.cells():
                if not self.in_bounds(*cell):
                    raise GridInvariantError(
                        f"{placed.item.name!r} occupies out-of-bounds cell {cell} "
                        f"in a {self.rows}x{self.cols} grid"
                    )
                if cell in seen:
                    other = self.items[seen[cell]].item.name
                    raise GridInvariantError(
                        f"{placed.item.name!r} overlaps {other!r} at {cell}"
                    )
                seen[cell] = i

    def copy(self) -> Grid:
        """작업용 얕은 복사. PlacedItem 객체는 공유한다."""
        return Grid(rows=self.rows, cols=self.cols, items=list(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def to_list(self) -> list[dict[str, Any]]:
        return [placed.to_dict() for placed in self.items]

    @classmethod
    def from_list(cls, dims: GridDims, records: list[dict[str, Any]]) -> Grid:
        """레코드 목록에서 복원. 목록이 아니면 ValueError."""
        if not isinstance(records, list):
            raise ValueError(f"Invalid grid record: expected a list, got {records!r}")
        return cls(
            rows=dims.rows,
            cols=dims.cols,
            items=[PlacedItem.from_dict(r) for r in records],
        )
