import logging
import time


logger = logging.getLogger(__name__)


class FixedTickScheduler:
    """Runs a task on a fixed period.

    poll() is called from the host loop and runs every tick that has come due
    since the last call, one after another. When the host stalls for longer
    than max_catch_up periods the backlog is dropped and the schedule is
    re-anchored to the clock.
    """

    def __init__(self, period, task, clock=time.perf_counter, max_catch_up=5):
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        self.period = period
        self.task = task
        self.clock = clock
        self.max_catch_up = max_catch_up
        self.ticks = 0
        self.next_time = clock()

    @classmethod
    def from_rate(cls, hz, task, **kwargs):
        if hz <= 0:
            raise ValueError(f"tick rate must be positive, got {hz}")
        return cls(1.0 / hz, task, **kwargs)

    def reset(self):
        self.next_time = self.clock()

    def poll(self):
        now = self.clock()
        if now < self.next_time:
            return 0

        due = int((now - self.next_time) / self.period) + 1
        if due > self.max_catch_up:
            logger.warning("tick loop fell behind by %d ticks, skipping ahead", due - self.max_catch_up)
            self.next_time = now - (self.max_catch_up - 1) * self.period
            due = self.max_catch_up

        for _ in range(due):
            self.task()
            self.ticks += 1
            self.next_time += self.period
        return due
