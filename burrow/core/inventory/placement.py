"""배치 엔진 — first-fit 삽입, 회전, 그리드 내 이동

탐색 순서는 행 우선(위 → 아래, 왼쪽 → 오른쪽)이며 결정적이다.
빈 2x3 그리드에 넣은 첫 아이템은 항상 (0, 0)에 회전 없이 놓인다.
"""

from dataclasses import replace
from typing import Optional

from burrow.core.item.models import Item, PlacedItem
from burrow.core.logging import get_logger

from .grid import Grid

logger = get_logger(__name__)


def rotate_item(item: Item) -> Item:
    """width/height 교환한 복사본. 두 번 적용하면 원래 방향."""
    return replace(
        item,
        width=item.height,
        height=item.width,
        usage=item.usage.copy() if item.usage else None,
    )


def find_anchor(grid: Grid, item: Item) -> Optional[tuple[int, int]]:
    """주어진 방향 그대로 들어가는 첫 anchor (행 우선). 없으면 None."""
    for r in range(grid.rows):
        for c in range(grid.cols):
            if grid.can_place(r, c, item):
                return r, c
    return None


def place_on_grid(grid: Grid, item: Item) -> Optional[PlacedItem]:
    """원래 방향으로 first-fit, 실패 시 회전 방향으로 같은 탐색.

    성공하면 item의 복사본을 그리드에 추가하고 그 PlacedItem을 반환한다.
    두 방향 모두 실패하면 None (호출자가 Ground 등 대체 처리).
    """
    candidates = [item] if item.is_square else [item, rotate_item(item)]
    for candidate in candidates:
        anchor = find_anchor(grid, candidate)
        if anchor is not None:
            placed = PlacedItem(item=candidate.copy(), row=anchor[0], col=anchor[1])
            grid.items.append(placed)
            logger.debug(
                "Placed %s at %s (%dx%d)",
                item.name,
                anchor,
                candidate.width,
                candidate.height,
            )
            return placed

    logger.debug("No fit for %s in %dx%d grid", item.name, grid.rows, grid.cols)
    return None


def place_at(grid: Grid, item: Item, row: int, col: int) -> Optional[PlacedItem]:
    """정확한 anchor에 주어진 방향으로만 배치. 탐색하지 않는다."""
    if not grid.can_place(row, col, item):
        return None
    placed = PlacedItem(item=item.copy(), row=row, col=col)
    grid.items.append(placed)
    return placed


def move_on_grid(grid: Grid, index: int, row: int, col: int) -> bool:
    """같은 그리드 안에서 anchor 변경. 자기 자신은 충돌 검사에서 제외."""
    entry = grid.get(index)
    if entry is None:
        return False
    if not grid.can_place(row, col, entry.item, exclude_index=index):
        return False
    entry.row = row
    entry.col = col
    return True


def rotate_on_grid(grid: Grid, index: int) -> bool:
    """제자리 회전.

    정사각형은 항상 성공 (이동 없음).
    그 외: 현재 anchor에서 회전 footprint 시도 → 실패 시 (row-1, col-1)부터
    그리드 끝까지의 제한된 영역을 행 우선 탐색. 전체 그리드 탐색이 아니다.
    모두 실패하면 False, 아이템은 원래 방향/위치 유지.
    """
    entry = grid.get(index)
    if entry is None:
        return False

    if entry.item.is_square:
        return True

    rotated = rotate_item(entry.item)

    if grid.can_place(entry.row, entry.col, rotated, exclude_index=index):
        entry.item = rotated
        return True

    for r in range(max(0, entry.row - 1), grid.rows):
        for c in range(max(0, entry.col - 1), grid.cols):
            if grid.can_place(r, c, rotated, exclude_index=index):
                entry.item = rotated
                entry.row = r
                entry.col = c
                return True

    logger.debug("Cannot rotate %s at (%d, %d)", entry.item.name, entry.row, entry.col)
    return False
