import time

from blockirc.block.timeutil import now


def test_now_is_whole_seconds_within_wall_clock():
    before = int(time.time())
    value = now()
    after = int(time.time())
    assert isinstance(value, int)
    assert before <= value <= after


def test_now_is_monotonic_enough():
    first = now()
    second = now()
    assert second >= first