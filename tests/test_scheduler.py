import pytest

from pokeduel.battle.scheduler import RealtimeScheduler, Scheduler


def test_callbacks_fire_in_due_order():
    sched = Scheduler()
    fired = []
    sched.call_later(1.0, fired.append, "b")
    sched.call_later(0.5, fired.append, "a")
    sched.call_later(1.0, fired.append, "c")  # same due time: scheduling order wins
    assert sched.advance(0.4) == 0
    assert fired == []
    assert sched.advance(1.0) == 3
    assert fired == ["a", "b", "c"]
    assert sched.now() == pytest.approx(1.4)


def test_cancelled_handle_never_fires():
    sched = Scheduler()
    fired = []
    h = sched.call_later(0.2, fired.append, "x")
    assert sched.pending() == 1
    h.cancel()
    assert not h.active
    assert sched.pending() == 0
    sched.run_until_idle()
    assert fired == []


def test_nested_scheduling_during_advance():
    sched = Scheduler()
    seen = []

    def first():
        seen.append(("first", sched.now()))
        sched.call_later(0.3, second)

    def second():
        seen.append(("second", sched.now()))

    sched.call_later(0.5, first)
    sched.advance(0.7)
    assert seen == [("first", 0.5)]
    sched.advance(0.2)
    assert [name for name, _ in seen] == ["first", "second"]
    assert seen[1][1] == pytest.approx(0.8)


def test_run_until_idle_drains_chain():
    sched = Scheduler()
    count = []

    def tick():
        count.append(1)
        if len(count) < 5:
            sched.call_later(1.0, tick)

    sched.call_later(1.0, tick)
    assert sched.run_until_idle() == 5
    assert sched.now() == pytest.approx(5.0)
    assert sched.next_due() is None


def test_run_until_idle_guards_runaway_loops():
    sched = Scheduler()

    def forever():
        sched.call_later(0, forever)

    sched.call_later(0, forever)
    with pytest.raises(RuntimeError):
        sched.run_until_idle(max_callbacks=50)


def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        Scheduler().call_later(-0.1, lambda: None)


def test_cancel_all():
    sched = Scheduler()
    fired = []
    handles = [sched.call_later(i, fired.append, i) for i in range(3)]
    sched.cancel_all()
    assert all(not h.active for h in handles)
    sched.run_until_idle()
    assert fired == []


def test_realtime_scheduler_sleeps_until_due():
    clock = [100.0]
    slept = []

    def fake_sleep(seconds):
        slept.append(round(seconds, 6))
        clock[0] += seconds

    sched = RealtimeScheduler(sleep=fake_sleep, clock=lambda: clock[0])
    fired = []
    sched.call_later(0.5, fired.append, "a")
    sched.call_later(1.5, fired.append, "b")
    sched.run_until_idle()
    assert fired == ["a", "b"]
    assert slept == [0.5, 1.0]
