from kungfu import Ok

from try_concurrently import PENDING, Pending, Ready, is_ready, map_poll, poll_to_string


def test_pending_is_structurally_equal() -> None:
    assert Pending() == PENDING
    assert Pending() != Ready(None)


def test_ready_compares_by_value() -> None:
    assert Ready(1) == Ready(1)
    assert Ready(1) != Ready(2)


def test_is_ready() -> None:
    assert is_ready(Ready("x"))
    assert not is_ready(PENDING)


def test_map_poll_only_touches_ready() -> None:
    assert map_poll(Ready(2), lambda v: v * 10) == Ready(20)
    assert map_poll(PENDING, lambda v: v * 10) == PENDING
    assert Ready("a").map(str.upper) == Ready("A")


def test_poll_to_string() -> None:
    assert poll_to_string(PENDING) == "<<pending>>"
    assert poll_to_string(Ready(3)) == "<<ready:3>>"
    assert poll_to_string(Ready(Ok(1)), lambda r: "ok") == "<<ready:ok>>"
