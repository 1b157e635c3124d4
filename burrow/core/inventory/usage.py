"""사용 점(usage dots) 표시 / 해제

그리드든 Ground든 위치에 관계없이 아이템의 UsageDots를 조작한다.
카운터가 없는 아이템이나 빈 위치는 False (로그 없음).
"""

from typing import Optional

from burrow.core.item.models import Item
from burrow.core.logging import get_logger

from .entity import EntitySheet
from .transfer import Location, item_at

logger = get_logger(__name__)


def _tracked(sheet: EntitySheet, source: Location) -> Optional[Item]:
    item = item_at(sheet, source)
    if item is None or item.usage is None:
        return None
    return item


def mark_usage(sheet: EntitySheet, source: Location) -> bool:
    """사용 1회 표시. 이미 가득 찼으면 False."""
    item = _tracked(sheet, source)
    if item is None or not item.usage.mark():
        return False
    usage = item.usage
    sheet.add_log(f"Marked usage on {item.name} ({usage.used}/{usage.total}).")
    if usage.is_depleted:
        sheet.add_log(f"{item.name} is used up.")
        logger.info("%s: %s is used up", sheet.name, item.name)
    return True


def clear_usage(sheet: EntitySheet, source: Location) -> bool:
    """사용 표시 1개 해제. 0이면 False."""
    item = _tracked(sheet, source)
    if item is None or not item.usage.clear():
        return False
    usage = item.usage
    sheet.add_log(f"Cleared usage on {item.name} ({usage.used}/{usage.total}).")
    return True
