"""이동 / 교환 엔진

그리드와 Ground 사이의 아이템 이동, 점유 셀에 놓을 때의 밀어내기(displacement).

원자성: 모든 작업은 리스트 작업 복사본에서 수행하고, 마지막에 한 번에 반영한다.
호출자는 이동 전 또는 이동 후 상태만 본다. 엔진은 아이템을 삭제하지 않는다
(명시적 discard_item 제외). 들어갈 곳이 없으면 Ground로 보낸다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from burrow.core.item.models import Bank, Item, PlacedItem
from burrow.core.logging import get_logger

from .entity import EntitySheet
from .grid import Grid, GridName
from .placement import place_at, place_on_grid, rotate_item

logger = get_logger(__name__)


@dataclass(frozen=True)
class GridSlot:
    """그리드 위의 아이템 위치"""

    grid: GridName
    index: int


@dataclass(frozen=True)
class GroundSlot:
    """Ground 위의 아이템 위치"""

    index: int


Location = Union[GridSlot, GroundSlot]


@dataclass
class TransferResult:
    """success: 들어온 아이템이 목표 그리드에 놓였는지 여부"""

    success: bool
    placed: Optional[PlacedItem] = None
    grounded: list[Item] = field(default_factory=list)
    message: str = ""


def remove_from_grid(grid: Grid, index: int) -> Optional[PlacedItem]:
    """인덱스의 PlacedItem을 떼어내 반환. 잘못된 인덱스는 None (변경 없음)."""
    if index < 0 or index >= len(grid.items):
        return None
    return grid.items.pop(index)


def _detach(items: list, target: object) -> None:
    """identity 기준 제거. 인덱스 이동에 영향받지 않는다."""
    for i, candidate in enumerate(items):
        if candidate is target:
            del items[i]
            return


def _peek(sheet: EntitySheet, source: Location) -> Optional[Union[PlacedItem, Item]]:
    if isinstance(source, GridSlot):
        return sheet.grid(source.grid).get(source.index)
    if 0 <= source.index < len(sheet.ground):
        return sheet.ground[source.index]
    return None


def item_at(sheet: EntitySheet, source: Location) -> Optional[Item]:
    """위치의 아이템 (배치 정보 없이). 없으면 None."""
    entry = _peek(sheet, source)
    if isinstance(entry, PlacedItem):
        return entry.item
    return entry


def _take(sheet: EntitySheet, source: Location) -> Optional[Item]:
    """위치의 아이템을 즉시 떼어낸다 (단일 리스트 변경)."""
    if isinstance(source, GridSlot):
        placed = remove_from_grid(sheet.grid(source.grid), source.index)
        return placed.item if placed else None
    if 0 <= source.index < len(sheet.ground):
        return sheet.ground.pop(source.index)
    return None


class _Workspace:
    """이동 중 버퍼. commit 전까지 시트는 변경되지 않는다."""

    def __init__(self, sheet: EntitySheet) -> None:
        self.sheet = sheet
        self.grids = {name: grid.copy() for name, grid in sheet.grids()}
        self.ground = list(sheet.ground)

    def detach(self, source: Location, entry: Union[PlacedItem, Item]) -> None:
        if isinstance(source, GridSlot):
            _detach(self.grids[source.grid].items, entry)
        else:
            _detach(self.ground, entry)

    def commit(self) -> None:
        for name, work in self.grids.items():
            self.sheet.grid(name).items[:] = work.items
        self.sheet.ground[:] = self.ground


def drop_on_cell(
    sheet: EntitySheet,
    source: Location,
    target: GridName | str,
    row: int,
    col: int,
) -> TransferResult:
    """source의 아이템을 target 그리드의 (row, col)에 놓는다.

    점유 셀: 점유자를 빼고, 들어오는 아이템을 정확히 그 anchor에 원래 방향으로 시도
    (회전 시도 없음, 실패 시 Ground). 밀려난 점유자는 자기 그리드에 first-fit으로
    재배치, 실패 시 Ground.
    빈 셀: 원래 방향 → 같은 anchor에서 회전 방향 → Ground + 로그.
    anchor 주변은 탐색하지 않는다.
    """
    target_name = GridName(target)
    target_grid = sheet.grid(target_name)
    if not target_grid.in_bounds(row, col):
        return TransferResult(False, message=f"Cell ({row}, {col}) is out of bounds.")

    entry = _peek(sheet, source)
    if entry is None:
        return TransferResult(False, message="Nothing to move.")
    incoming = entry.item if isinstance(entry, PlacedItem) else entry

    work = _Workspace(sheet)
    work_target = work.grids[target_name]
    occupant_index = work_target.index_at(row, col)

    if occupant_index is not None:
        occupant = work_target.items[occupant_index]
        if occupant is entry:
            return TransferResult(True, placed=occupant)
        result = _swap_into_occupied(
            work, source, entry, incoming, occupant, target_name, row, col
        )
    else:
        result = _drop_into_empty(work, source, entry, incoming, target_name, row, col)

    work.commit()
    logger.debug(
        "Dropped %s on %s (%d, %d): success=%s, grounded=%d",
        incoming.name,
        target_name.value,
        row,
        col,
        result.success,
        len(result.grounded),
    )
    return result


def _swap_into_occupied(
    work: _Workspace,
    source: Location,
    entry: Union[PlacedItem, Item],
    incoming: Item,
    occupant: PlacedItem,
    target_name: GridName,
    row: int,
    col: int,
) -> TransferResult:
    target_grid = work.grids[target_name]
    _detach(target_grid.items, occupant)
    work.detach(source, entry)

    result = TransferResult(False)
    placed = place_at(target_grid, incoming, row, col)
    if placed is not None:
        result.success = True
        result.placed = placed
        result.message = f"Moved {incoming.name}, displacing {occupant.item.name}."
    else:
        result.message = f"{incoming.name} doesn't fit there — moved to ground."
        work.ground.append(incoming.copy())
        result.grounded.append(incoming)
        work.sheet.add_log(result.message)

    # 밀려난 점유자는 원래 있던 컨테이너(target 그리드)로 돌아간다. source 그리드가 아님.
    if place_on_grid(target_grid, occupant.item) is None:
        work.ground.append(occupant.item)
        result.grounded.append(occupant.item)
        work.sheet.add_log(f"No room for {occupant.item.name} — moved to ground.")
        logger.info("Displaced %s moved to ground", occupant.item.name)

    return result


def _drop_into_empty(
    work: _Workspace,
    source: Location,
    entry: Union[PlacedItem, Item],
    incoming: Item,
    target_name: GridName,
    row: int,
    col: int,
) -> TransferResult:
    target_grid = work.grids[target_name]
    work.detach(source, entry)

    placed = place_at(target_grid, incoming, row, col)
    if placed is None and not incoming.is_square:
        placed = place_at(target_grid, rotate_item(incoming), row, col)
    if placed is not None:
        return TransferResult(True, placed=placed, message=f"Moved {incoming.name}.")

    message = f"{incoming.name} doesn't fit there — moved to ground."
    work.ground.append(incoming.copy())
    work.sheet.add_log(message)
    logger.info("%s: %s", work.sheet.name, message)
    return TransferResult(False, grounded=[incoming], message=message)


def drop_on_ground(sheet: EntitySheet, source: Location) -> TransferResult:
    """그리드 아이템을 Ground로. Ground 위치는 변경 없음."""
    if isinstance(source, GroundSlot):
        return TransferResult(False, message="Item is already on the ground.")
    placed = remove_from_grid(sheet.grid(source.grid), source.index)
    if placed is None:
        return TransferResult(False, message="Nothing to move.")
    sheet.ground.append(placed.item)
    return TransferResult(
        True, grounded=[placed.item], message=f"Moved {placed.item.name} to ground."
    )


def discard_item(sheet: EntitySheet, source: Location) -> Optional[Item]:
    """명시적 삭제. 엔진에서 아이템이 사라지는 유일한 경로."""
    item = _take(sheet, source)
    if item is not None:
        sheet.add_log(f"Deleted {item.name}.")
    return item


def give_item(
    giver: EntitySheet, source: Location, receiver: EntitySheet
) -> TransferResult:
    """다른 시트에 아이템 전달. 받는 쪽 Pack first-fit, 실패 시 받는 쪽 Ground."""
    item = _take(giver, source)
    if item is None:
        return TransferResult(False, message="Nothing to give.")

    giver.add_log(f"Gave {item.name} to {receiver.name}.")
    placed = place_on_grid(receiver.pack, item)
    if placed is not None:
        receiver.add_log(f"Received {item.name} from {giver.name}.")
        return TransferResult(True, placed=placed, message=f"Gave {item.name}.")

    receiver.ground.append(item)
    receiver.add_log(f"No room in pack — {item.name} placed on ground.")
    return TransferResult(
        False, grounded=[item], message=f"{receiver.name} had no room for {item.name}."
    )


def deposit_in_bank(sheet: EntitySheet, source: Location, bank: Bank) -> bool:
    """정착지 은행에 아이템 보관"""
    item = _take(sheet, source)
    if item is None:
        return False
    bank.items.append(item)
    sheet.add_log(f"Deposited {item.name} in {bank.settlement_name} bank.")
    return True
