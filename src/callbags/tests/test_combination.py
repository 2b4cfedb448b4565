"""Tests for concat and flatten.

Validates:
- concat plays sources in order, replays the last pull, stops on error
- flatten switches to the newest inner source and cancels the old one
- Every termination path of flatten reaches the sink exactly once
"""

from __future__ import annotations

import sys

import pytest

import callbags as cb
from callbags import Completed, concat, flatten, for_each, from_array, to_iter
from callbags.foundation.testing import ManualSource, ProbeSource, SignalRecorder


def cancel_order(name: str, source: cb.Source, order: list[str]) -> cb.Source:
    """Wrap ``source`` so a talkback END appends ``name`` to ``order``."""
    def wrapped(kind: str, sink: object = None) -> None:
        if kind != cb.START:
            return
        
        def receive(t: str, d: object = None) -> None:
            if t == cb.START:
                def talkback(k: str, p: object = None) -> None:
                    if k == cb.END:
                        order.append(name)
                    d(k, p)
                sink(cb.START, talkback)
            else:
                sink(t, d)
        
        source(cb.START, receive)
    return wrapped


# ═════════════════════════════════════════════════════════════════════════════
# concat
# ═════════════════════════════════════════════════════════════════════════════


class TestConcat:
    def test_plays_sources_in_order(self) -> None:
        assert list(to_iter(concat(cb.range(1, 2), from_array([3, 4])))) == [1, 2, 3, 4]
    
    def test_ranges_through_for_each(self) -> None:
        seen: list[int] = []
        ends: list[cb.Termination] = []
        for_each(seen.append, on_end=ends.append)(concat(cb.range(1, 2), cb.range(3, 4)))
        assert seen == [1, 2, 3, 4]
        assert ends == [Completed()]
    
    def test_no_sources_greets_then_completes(self) -> None:
        sink = SignalRecorder()
        concat()(cb.START, sink)
        assert sink.kinds == ["start", "end"]
        sink.assert_completed()
    
    def test_empty_sources_are_skipped(self) -> None:
        assert list(to_iter(concat(from_array([]), from_array([1]), from_array([])))) == [1]
    
    def test_greets_sink_once(self) -> None:
        sink = SignalRecorder(pull_on_start=True, pull_on_data=True)
        concat(from_array("ab"), from_array("cd"), from_array("e"))(cb.START, sink)
        sink.assert_greeted_once()
        assert sink.data == list("abcde")
        sink.assert_completed()
    
    def test_replays_last_pull_to_next_source(self) -> None:
        first, second = ProbeSource([1]), ProbeSource([2])
        sink = SignalRecorder(pull_on_start=True)
        concat(first, second)(cb.START, sink)
        
        sink.pull("again")
        
        assert sink.data == [1, 2]
        assert second.requests == [(cb.DATA, "again")]
    
    def test_push_sources_follow_each_other(self) -> None:
        first, second = ManualSource(), ManualSource()
        sink = SignalRecorder()
        concat(first, second)(cb.START, sink)
        
        first.emit("a")
        assert second.greets == 0
        first.end()
        second.emit("b")
        second.end()
        
        assert sink.data == ["a", "b"]
        sink.assert_completed()
    
    def test_error_stops_the_sequence(self) -> None:
        first, second = ManualSource(), ManualSource()
        sink = SignalRecorder()
        concat(first, second)(cb.START, sink)
        
        first.end("failed")
        
        sink.assert_failed("failed")
        assert second.greets == 0
    
    def test_cancel_reaches_active_source_only(self) -> None:
        first, second = ManualSource(), ManualSource()
        sink = SignalRecorder()
        concat(first, second)(cb.START, sink)
        first.end()
        
        sink.cancel()
        sink.cancel()
        
        assert second.cancels == 1
        assert first.cancels == 0
        assert not sink.ended
    
    def test_cancel_before_next_source_greets_ends_it(self) -> None:
        first, second = ManualSource(), ManualSource(deferred=True)
        sink = SignalRecorder()
        concat(first, second)(cb.START, sink)
        first.end()
        
        sink.cancel()
        second.greet()
        
        assert second.cancels == 1
        assert not second.active
        assert not sink.ended
    
    def test_many_synchronous_sources_keep_stack_flat(self) -> None:
        count = sys.getrecursionlimit() * 2
        sources = [from_array([]) for _ in range(count)]
        assert list(to_iter(concat(*sources, from_array([7])))) == [7]
    
    def test_is_restartable(self) -> None:
        both = concat(from_array([1]), from_array([2]))
        assert list(to_iter(both)) == [1, 2]
        assert list(to_iter(both)) == [1, 2]


# ═════════════════════════════════════════════════════════════════════════════
# flatten
# ═════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def switching() -> tuple[ManualSource, SignalRecorder]:
    outer, sink = ManualSource(), SignalRecorder()
    flatten(outer)(cb.START, sink)
    return outer, sink


class TestFlatten:
    def test_map_then_flatten_over_pull_sources(self) -> None:
        nested = cb.map(lambda n: cb.range(1, n))(from_array([1, 2, 3]))
        assert list(to_iter(flatten(nested))) == [1, 1, 2, 1, 2, 3]
    
    def test_inner_is_pulled_once_on_start(self, switching) -> None:  # type: ignore[no-untyped-def]
        outer, sink = switching
        inner = ManualSource()
        outer.emit(inner)
        assert inner.requests == [(cb.DATA, None)]
        sink.assert_greeted_once()
    
    def test_new_inner_cancels_previous_before_starting(self, switching) -> None:  # type: ignore[no-untyped-def]
        outer, sink = switching
        first, second = ManualSource(), ManualSource()
        
        outer.emit(first)
        first.emit("a")
        outer.emit(second)
        first.emit("stale")
        second.emit("b")
        
        assert sink.data == ["a", "b"]
        assert first.cancels == 1
        assert not first.active
        assert second.active
    
    def test_previous_inner_ended_before_next_greeted(self, switching) -> None:  # type: ignore[no-untyped-def]
        outer, _ = switching
        first, second = ManualSource(), ManualSource()
        cancels_at_start: list[int] = []
        
        def observed(kind: str, sink: object = None) -> None:
            cancels_at_start.append(first.cancels)
            second(kind, sink)
        
        outer.emit(first, observed)
        assert cancels_at_start == [1]
    
    def test_inner_switched_away_before_greeting_is_ended(self, switching) -> None:  # type: ignore[no-untyped-def]
        outer, sink = switching
        slow, fast = ManualSource(deferred=True), ManualSource()
        
        outer.emit(slow, fast)
        slow.greet()
        slow.emit("stale")
        fast.emit("fresh")
        
        assert slow.cancels == 1
        assert not slow.active
        assert sink.data == ["fresh"]
    
    def test_inner_greeting_after_downstream_cancel_is_ended(self, switching) -> None:  # type: ignore[no-untyped-def]
        outer, sink = switching
        slow = ManualSource(deferred=True)
        outer.emit(slow)
        
        sink.cancel()
        slow.greet()
        
        assert slow.cancels == 1
        assert outer.cancels == 1
    
    def test_at_most_one_inner_live(self, switching) -> None:  # type: ignore[no-untyped-def]
        outer, _ = switching
        inners = [ManualSource() for _ in range(5)]
        for inner in inners:
            outer.emit(inner)
            assert sum(i.active for i in inners) == 1
    
    def test_inner_end_pulls_outer(self, switching) -> None:  # type: ignore[no-untyped-def]
        outer, sink = switching
        inner = ManualSource()
        outer.emit(inner)
        inner.end()
        assert outer.requests == [(cb.DATA, None)]
        assert not sink.ended
    
    def test_outer_end_waits_for_inner(self, switching) -> None:  # type: ignore[no-untyped-def]
        outer, sink = switching
        inner = ManualSource()
        outer.emit(inner)
        outer.end()
        inner.emit(1)
        assert not sink.ended
        
        inner.end()
        assert sink.data == [1]
        sink.assert_completed()
    
    def test_outer_end_without_inner_completes(self, switching) -> None:  # type: ignore[no-untyped-def]
        outer, sink = switching
        outer.end()
        sink.assert_completed()
    
    def test_outer_error_cancels_inner(self, switching) -> None:  # type: ignore[no-untyped-def]
        outer, sink = switching
        inner = ManualSource()
        outer.emit(inner)
        outer.end("outer broke")
        
        sink.assert_failed("outer broke")
        assert inner.cancels == 1
    
    def test_inner_error_cancels_outer(self, switching) -> None:  # type: ignore[no-untyped-def]
        outer, sink = switching
        inner = ManualSource()
        outer.emit(inner)
        inner.end("inner broke")
        
        sink.assert_failed("inner broke")
        assert outer.cancels == 1
    
    def test_downstream_cancel_ends_inner_then_outer(self) -> None:
        order: list[str] = []
        outer, inner = ManualSource(), ManualSource()
        sink = SignalRecorder()
        flatten(cancel_order("outer", outer, order))(cb.START, sink)
        outer.emit(cancel_order("inner", inner, order))
        
        sink.cancel()
        sink.cancel()
        
        assert order == ["inner", "outer"]
        assert not sink.ended
    
    def test_pull_goes_to_inner_when_live(self, switching) -> None:  # type: ignore[no-untyped-def]
        outer, sink = switching
        sink.pull("to outer")
        inner = ManualSource()
        outer.emit(inner)
        sink.pull("to inner")
        
        assert outer.requests == [(cb.DATA, "to outer")]
        assert inner.requests == [(cb.DATA, None), (cb.DATA, "to inner")]
