"""Tests for common.pacing module."""

from common.pacing import Pacer


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0
        self.sleeps: list[float] = []

    def clock(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class TestPacer:
    def test_first_call_does_not_wait(self) -> None:
        fake = FakeClock()
        Pacer(0.5, sleep=fake.sleep, clock=fake.clock).wait()
        assert fake.sleeps == []

    def test_back_to_back_calls_wait_full_delay(self) -> None:
        fake = FakeClock()
        pacer = Pacer(0.5, sleep=fake.sleep, clock=fake.clock)
        pacer.wait()
        pacer.wait()
        assert fake.sleeps == [0.5]

    def test_only_waits_for_remaining_interval(self) -> None:
        fake = FakeClock()
        pacer = Pacer(1.0, sleep=fake.sleep, clock=fake.clock)
        pacer.wait()
        fake.now += 0.75
        pacer.wait()
        assert fake.sleeps == [0.25]

    def test_no_wait_when_interval_already_passed(self) -> None:
        fake = FakeClock()
        pacer = Pacer(1.0, sleep=fake.sleep, clock=fake.clock)
        pacer.wait()
        fake.now += 5
        pacer.wait()
        assert fake.sleeps == []

    def test_zero_delay_never_sleeps(self) -> None:
        fake = FakeClock()
        pacer = Pacer(0, sleep=fake.sleep, clock=fake.clock)
        for _ in range(3):
            pacer.wait()
        assert fake.sleeps == []
