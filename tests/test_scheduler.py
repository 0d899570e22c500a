import pytest

from scheduler import FixedTickScheduler


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock(100.0)


@pytest.fixture
def calls():
    return []


def make(clock, calls, period=0.5, **kwargs):
    return FixedTickScheduler(period, lambda: calls.append(clock.now), clock=clock, **kwargs)


def test_first_poll_runs_one_tick(clock, calls):
    sched = make(clock, calls)
    assert sched.poll() == 1
    assert calls == [100.0]


def test_no_tick_before_period_elapses(clock, calls):
    sched = make(clock, calls)
    sched.poll()
    clock.now = 100.25
    assert sched.poll() == 0
    assert len(calls) == 1


def test_runs_each_due_tick_once(clock, calls):
    sched = make(clock, calls)
    sched.poll()
    clock.now = 101.0
    assert sched.poll() == 2
    assert sched.ticks == 3
    assert sched.next_time == 101.5


def test_catch_up_is_capped(clock, calls):
    sched = make(clock, calls, max_catch_up=3)
    clock.now = 200.0
    assert sched.poll() == 3
    assert sched.next_time == 200.5
    clock.now = 200.5
    assert sched.poll() == 1


def test_reset_reanchors_schedule(clock, calls):
    sched = make(clock, calls)
    clock.now = 110.0
    sched.reset()
    clock.now = 109.75
    assert sched.poll() == 0
    clock.now = 110.0
    assert sched.poll() == 1
    assert calls == [110.0]


def test_from_rate():
    sched = FixedTickScheduler.from_rate(30, lambda: None, clock=FakeClock())
    assert sched.period == pytest.approx(1 / 30)


@pytest.mark.parametrize("period", [0, -1])
def test_rejects_bad_period(period):
    with pytest.raises(ValueError):
        FixedTickScheduler(period, lambda: None)


def test_rejects_bad_rate():
    with pytest.raises(ValueError):
        FixedTickScheduler.from_rate(0, lambda: None)
