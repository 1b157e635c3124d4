"""EventBus - 인벤토리 서비스 → 구독자(활동 피드 등) 동기 이벤트 전달

규칙:
- 엔진(core.inventory)은 EventBus를 모른다. 발행은 서비스 계층에서만 한다
- 이벤트는 sheet_id + 식별자(아이템 이름, 위치)만 전달한다
- 서비스 조작 하나 = 체인 하나 (operation() 블록). 블록이 끝나면 체인 초기화
- 한 체인에서 같은 source:event_type:sheet_id는 한 번만 발행된다
- 핸들러가 다시 발행하는 연쇄는 MAX_DEPTH 단계까지만
"""

from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Set

from burrow.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 3  # 연쇄 발행 최대 단계 (서비스 발행 포함)

ALL_EVENTS = "*"


@dataclass
class SheetEvent:
    """시트 하나에 대한 이벤트

    Args:
        event_type: 이벤트 유형 (EventTypes 상수)
        sheet_id: 대상 시트
        data: 식별자 위주의 부가 정보 (Item 객체 자체는 넣지 않는다)
        source: 발행한 서비스 이름
    """

    event_type: str
    sheet_id: Optional[str]
    data: Dict[str, Any] = field(default_factory=dict)
    source: str = ""

    # 내부 추적용 (외부에서 설정하지 않음)
    _depth: int = field(default=0, repr=False)

    @property
    def chain_key(self) -> str:
        return f"{self.source}:{self.event_type}:{self.sheet_id}"


EventHandler = Callable[[SheetEvent], None]


class EventBus:
    """동기식 이벤트 버스

    사용 패턴:
        bus = EventBus()
        bus.subscribe_all(feed.record)
        with bus.operation():
            bus.emit(SheetEvent("item_grounded", sheet_id, {"items": ["Rope"]}, "inventory_service"))
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._current_depth: int = 0
        self._emitted_in_chain: Set[str] = set()
        self._open_operations: int = 0

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """이벤트 구독 등록. event_type이 ALL_EVENTS면 모든 이벤트 수신."""
        self._handlers[event_type].append(handler)
        logger.debug("EventBus subscribe: %s -> %s", event_type, handler.__qualname__)

    def subscribe_all(self, handler: EventHandler) -> None:
        self.subscribe(ALL_EVENTS, handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        try:
            self._handlers[event_type].remove(handler)
        except ValueError:
            logger.warning(
                "Handler not registered: %s -> %s", event_type, handler.__qualname__
            )

    @contextmanager
    def operation(self) -> Iterator[None]:
        """서비스 조작 하나를 감싸는 체인. 중첩되면 가장 바깥 블록이 끝날 때 초기화."""
        self._open_operations += 1
        try:
            yield
        finally:
            self._open_operations -= 1
            if self._open_operations == 0:
                self.reset_chain()

    def emit(self, event: SheetEvent) -> bool:
        """이벤트 발행. 등록된 핸들러를 동기 호출.

        반환: 전달 여부. 깊이 초과나 체인 내 중복이면 False.
        """
        if self._current_depth >= MAX_DEPTH:
            logger.warning(
                "EventBus depth exceeded (%d): %s dropped", MAX_DEPTH, event.chain_key
            )
            return False

        if event.chain_key in self._emitted_in_chain:
            logger.debug("EventBus duplicate event blocked: %s", event.chain_key)
            return False
        self._emitted_in_chain.add(event.chain_key)
        event._depth = self._current_depth

        handlers = self._handlers.get(event.event_type, []) + self._handlers.get(
            ALL_EVENTS, []
        )
        if not handlers:
            logger.debug("EventBus: no subscribers for %s", event.event_type)

        self._current_depth += 1
        try:
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        "EventBus handler error: %s (event=%s)",
                        handler.__qualname__,
                        event.event_type,
                    )
        finally:
            self._current_depth -= 1

        # operation() 밖에서 발행된 이벤트는 단독 체인
        if self._open_operations == 0 and self._current_depth == 0:
            self.reset_chain()
        return True

    def reset_chain(self) -> None:
        self._emitted_in_chain.clear()
        self._current_depth = 0

    def clear(self) -> None:
        """모든 구독 해제 (종료 시)"""
        self._handlers.clear()
        self.reset_chain()

    @property
    def handler_count(self) -> int:
        return sum(len(h) for h in self._handlers.values())
