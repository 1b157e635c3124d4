"""이벤트 유형 상수

InventoryService가 발행하는 이벤트 목록. ActivityFeed는 전부 구독한다.
"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # sheet
    SHEET_CREATED = "sheet_created"
    INVENTORY_MIGRATED = "inventory_migrated"

    # item
    ITEM_ADDED = "item_added"
    ITEM_MOVED = "item_moved"
    ITEM_ROTATED = "item_rotated"
    ITEM_GROUNDED = "item_grounded"
    ITEM_DISCARDED = "item_discarded"
    ITEM_GIVEN = "item_given"
    ITEM_RECEIVED = "item_received"
    ITEM_DEPOSITED = "item_deposited"
    USAGE_CHANGED = "usage_changed"

    # condition
    CONDITION_ADDED = "condition_added"
