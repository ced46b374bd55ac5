from __future__ import annotations

from md_highlighter.scheduler import DirtyBlockScheduler


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def _recording_scheduler(**kwargs) -> tuple[DirtyBlockScheduler, list[str]]:
    calls: list[str] = []
    scheduler = DirtyBlockScheduler(calls.append, clock=FakeClock(), **kwargs)
    return scheduler, calls


def test_repeated_marks_reclassify_once():
    scheduler, calls = _recording_scheduler()

    for _ in range(3):
        scheduler.mark_dirty("a")

    assert len(scheduler) == 1
    assert scheduler.drain() == 1
    assert calls == ["a"]


def test_drain_follows_marking_order():
    scheduler, calls = _recording_scheduler()

    for handle in ("c", "a", "b", "a"):
        scheduler.mark_dirty(handle)

    assert scheduler.pending == ("c", "a", "b")
    scheduler.drain()
    assert calls == ["c", "a", "b"]
    assert len(scheduler) == 0


def test_blocks_marked_during_drain_settle_in_same_drain():
    calls: list[str] = []

    def reclassify(handle: str) -> None:
        calls.append(handle)
        if handle == "a" and calls.count("a") == 1:
            scheduler.mark_dirty("b")
            scheduler.mark_dirty("a")

    scheduler = DirtyBlockScheduler(reclassify, clock=FakeClock())
    scheduler.mark_dirty("a")

    assert scheduler.drain() == 3
    assert calls == ["a", "b", "a"]


def test_drain_bound_leaves_rest_queued():
    scheduler, calls = _recording_scheduler(max_lines_per_drain=2)
    for handle in ("a", "b", "c"):
        scheduler.mark_dirty(handle)

    assert scheduler.drain() == 2
    assert scheduler.pending == ("c",)
    assert scheduler.drain() == 1
    assert calls == ["a", "b", "c"]


def test_discard_and_clear():
    scheduler, calls = _recording_scheduler()
    for handle in ("a", "b", "c"):
        scheduler.mark_dirty(handle)

    scheduler.discard("b")
    scheduler.discard("missing")
    assert "b" not in scheduler
    assert "a" in scheduler

    scheduler.clear()
    assert scheduler.drain() == 0
    assert calls == []


def test_tick_notifies_listeners_only_after_work():
    scheduler, _ = _recording_scheduler()
    notified: list[bool] = []
    scheduler.add_listener(lambda: notified.append(True))

    assert scheduler.tick() is False
    assert notified == []

    scheduler.mark_dirty("a")
    assert scheduler.tick() is True
    assert notified == [True]


def test_poll_waits_for_interval():
    clock = FakeClock(10.0)
    calls: list[str] = []
    scheduler = DirtyBlockScheduler(calls.append, interval=1.0, clock=clock)
    scheduler.mark_dirty("a")

    assert scheduler.poll(10.5) is False
    assert calls == []

    assert scheduler.poll(11.0) is True
    assert calls == ["a"]

    scheduler.mark_dirty("b")
    assert scheduler.poll(11.5) is False
    clock.now = 12.0
    assert scheduler.poll() is True
    assert calls == ["a", "b"]


def test_tick_resets_poll_interval():
    clock = FakeClock(0.0)
    scheduler = DirtyBlockScheduler(lambda handle: None, interval=1.0, clock=clock)

    clock.now = 5.0
    scheduler.tick()
    scheduler.mark_dirty("a")

    assert scheduler.poll(5.5) is False
    assert scheduler.poll(6.0) is True
