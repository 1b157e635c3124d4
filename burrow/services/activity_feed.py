"""활동 피드 — 시트별 최근 인벤토리 이벤트 수집

EventBus의 모든 이벤트를 구독해 sheet_id별로 보관한다. 시트의 사람이 읽는
로그(EntitySheet.log)와 달리 구조화된 이벤트 기록이다.
"""

from collections import defaultdict, deque
from typing import Any, Deque, Dict, List, Optional

from burrow.core.event_bus import ALL_EVENTS, EventBus, SheetEvent


class ActivityFeed:
    """sheet_id → 최근 이벤트 (오래된 것부터 밀려난다)"""

    def __init__(self, limit: int) -> None:
        self._limit = limit
        self._entries: Dict[str, Deque[Dict[str, Any]]] = defaultdict(
            lambda: deque(maxlen=self._limit)
        )

    def attach(self, bus: EventBus) -> None:
        bus.subscribe_all(self.record)

    def detach(self, bus: EventBus) -> None:
        bus.unsubscribe(ALL_EVENTS, self.record)

    def record(self, event: SheetEvent) -> None:
        if event.sheet_id is None:
            return
        self._entries[event.sheet_id].append(
            {"event_type": event.event_type, **event.data}
        )

    def recent(self, sheet_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """오래된 것 → 최신 순. limit이 있으면 마지막 limit개."""
        entries = list(self._entries.get(sheet_id, ()))
        if limit is not None:
            entries = entries[-limit:] if limit > 0 else []
        return entries
