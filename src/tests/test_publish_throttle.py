import pytest

from notify_system import PublishThrottle


def test_first_notification_is_always_admitted(clock):
    throttle = PublishThrottle(10.0, clock=clock)
    assert throttle.last_publish_at is None
    assert throttle.admit() is True
    assert throttle.last_publish_at == 0.0


def test_second_edge_within_window_is_dropped(clock):
    # edges at t=0s and t=5s with a 10s window: only the first passes
    throttle = PublishThrottle(10.0, clock=clock)
    assert throttle.admit() is True
    clock.advance(5.0)
    assert throttle.admit() is False
    assert throttle.last_publish_at == 0.0
    assert throttle.admitted_count == 1
    assert throttle.dropped_count == 1


def test_edges_a_full_window_apart_both_pass(clock):
    throttle = PublishThrottle(10.0, clock=clock)
    assert throttle.admit() is True
    clock.advance(10.0)
    assert throttle.admit() is True
    assert throttle.last_publish_at == 10.0


def test_explicit_now_overrides_clock():
    throttle = PublishThrottle(10.0, clock=lambda: 1000.0)
    assert throttle.admit(now=0.0) is True
    assert throttle.admit(now=9.999) is False
    assert throttle.admit(now=10.0) is True


def test_last_publish_at_changes_once_per_admission_and_never_decreases(clock):
    throttle = PublishThrottle(2.0, clock=clock)
    history = []
    for _ in range(40):
        before = throttle.last_publish_at
        admitted = throttle.admit()
        after = throttle.last_publish_at
        if admitted:
            history.append(after)
        else:
            assert after == before
        clock.advance(0.7)

    assert len(history) == throttle.admitted_count
    assert history == sorted(history)
    assert len(set(history)) == len(history)


def test_clock_stepping_backwards_does_not_rewind(clock):
    throttle = PublishThrottle(0.0, clock=clock)
    clock.advance(5.0)
    assert throttle.admit() is True
    assert throttle.admit(now=3.0) is False
    assert throttle.last_publish_at == 5.0


def test_remaining_and_elapsed(clock):
    throttle = PublishThrottle(10.0, clock=clock)
    assert throttle.remaining_s() == 0.0
    assert throttle.elapsed_s() is None
    throttle.admit()
    clock.advance(4.0)
    assert throttle.elapsed_s() == pytest.approx(4.0)
    assert throttle.remaining_s() == pytest.approx(6.0)


def test_negative_window_is_rejected():
    with pytest.raises(ValueError):
        PublishThrottle(-1.0)
