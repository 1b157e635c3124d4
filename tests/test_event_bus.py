"""EventBus 테스트 — 조작 단위 체인, 와일드카드 구독, 연쇄 깊이 제한"""

from burrow.core.event_bus import ALL_EVENTS, MAX_DEPTH, EventBus, SheetEvent
from burrow.core.event_types import EventTypes


def _event(event_type: str = EventTypes.ITEM_ADDED, sheet_id: str = "s1", **data) -> SheetEvent:
    return SheetEvent(event_type=event_type, sheet_id=sheet_id, data=data, source="test")


# ── 구독 / 발행 ──────────────────────────────────────────────


class TestSubscribe:
    def test_typed_subscriber_only_sees_its_type(self) -> None:
        bus = EventBus()
        added: list[SheetEvent] = []
        bus.subscribe(EventTypes.ITEM_ADDED, added.append)

        assert bus.emit(_event(item="Rope"))
        bus.emit(_event(EventTypes.ITEM_DISCARDED, item="Rope"))

        assert [e.data["item"] for e in added] == ["Rope"]
        assert added[0].sheet_id == "s1"

    def test_wildcard_sees_everything_after_typed(self) -> None:
        bus = EventBus()
        order: list[str] = []
        bus.subscribe_all(lambda e: order.append(f"all:{e.event_type}"))
        bus.subscribe(EventTypes.ITEM_MOVED, lambda e: order.append("moved"))

        bus.emit(_event(EventTypes.ITEM_MOVED))
        bus.emit(_event(EventTypes.ITEM_ROTATED))

        assert order == ["moved", "all:item_moved", "all:item_rotated"]

    def test_emit_without_subscribers_is_delivered(self) -> None:
        assert EventBus().emit(_event())

    def test_unsubscribe_wildcard(self) -> None:
        bus = EventBus()
        seen: list[SheetEvent] = []
        bus.subscribe_all(seen.append)
        bus.unsubscribe(ALL_EVENTS, seen.append)
        bus.emit(_event())
        assert seen == []
        assert bus.handler_count == 0

    def test_unsubscribe_unknown_handler_is_harmless(self) -> None:
        EventBus().unsubscribe(EventTypes.ITEM_ADDED, lambda e: None)


# ── 조작 단위 체인 ───────────────────────────────────────────


class TestOperationChain:
    def test_duplicate_within_operation_blocked(self) -> None:
        bus = EventBus()
        seen: list[SheetEvent] = []
        bus.subscribe_all(seen.append)

        with bus.operation():
            assert bus.emit(_event(item="Rope"))
            assert not bus.emit(_event(item="Torch"))

        assert [e.data["item"] for e in seen] == ["Rope"]

    def test_same_type_for_two_sheets_both_delivered(self) -> None:
        """주기(giver)와 받기(receiver)처럼 시트가 다르면 중복이 아니다"""
        bus = EventBus()
        seen: list[SheetEvent] = []
        bus.subscribe_all(seen.append)

        with bus.operation():
            bus.emit(_event(sheet_id="giver"))
            bus.emit(_event(sheet_id="receiver"))

        assert [e.sheet_id for e in seen] == ["giver", "receiver"]

    def test_chain_resets_after_operation(self) -> None:
        bus = EventBus()
        seen: list[SheetEvent] = []
        bus.subscribe_all(seen.append)

        for _ in range(2):
            with bus.operation():
                bus.emit(_event())

        assert len(seen) == 2

    def test_nested_operation_keeps_outer_chain(self) -> None:
        bus = EventBus()
        with bus.operation():
            bus.emit(_event())
            with bus.operation():
                pass
            assert not bus.emit(_event())
        assert bus.emit(_event())

    def test_chain_resets_when_operation_raises(self) -> None:
        bus = EventBus()
        try:
            with bus.operation():
                bus.emit(_event())
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert bus.emit(_event())

    def test_standalone_emits_are_separate_chains(self) -> None:
        bus = EventBus()
        assert bus.emit(_event())
        assert bus.emit(_event())

    def test_reset_chain(self) -> None:
        bus = EventBus()
        with bus.operation():
            bus.emit(_event())
            bus.reset_chain()
            assert bus.emit(_event())


# ── 연쇄 발행 ────────────────────────────────────────────────


class TestCascade:
    def test_depth_limit(self) -> None:
        bus = EventBus()
        depths: list[int] = []

        def echo(event: SheetEvent) -> None:
            depths.append(event._depth)
            # 시트를 바꿔 체인 중복 검사를 피한다
            bus.emit(_event(EventTypes.USAGE_CHANGED, sheet_id=f"s{len(depths) + 1}"))

        bus.subscribe(EventTypes.USAGE_CHANGED, echo)
        bus.emit(_event(EventTypes.USAGE_CHANGED))

        assert depths == list(range(MAX_DEPTH))

    def test_handler_cannot_re_emit_its_own_event(self) -> None:
        bus = EventBus()
        calls = 0

        def loop(event: SheetEvent) -> None:
            nonlocal calls
            calls += 1
            bus.emit(event)

        bus.subscribe(EventTypes.ITEM_GROUNDED, loop)
        bus.emit(_event(EventTypes.ITEM_GROUNDED))
        assert calls == 1


# ── 핸들러 오류 / 종료 ───────────────────────────────────────


class TestHandlerErrors:
    def test_failing_handler_does_not_stop_others(self) -> None:
        bus = EventBus()
        seen: list[str] = []

        def broken(event: SheetEvent) -> None:
            raise KeyError("missing")

        bus.subscribe(EventTypes.ITEM_ADDED, broken)
        bus.subscribe_all(lambda e: seen.append(e.event_type))

        assert bus.emit(_event())
        assert seen == [EventTypes.ITEM_ADDED]

    def test_clear(self) -> None:
        bus = EventBus()
        bus.subscribe(EventTypes.ITEM_ADDED, lambda e: None)
        bus.subscribe_all(lambda e: None)
        assert bus.handler_count == 2
        bus.clear()
        assert bus.handler_count == 0
