import pytest
from kungfu import Error, Ok

from try_concurrently import (
    PENDING,
    CombinatorMovedError,
    ContractViolationError,
    NotAResultError,
    PollAfterDoneError,
    Ready,
    State,
    TryConcurrently,
    lift as L,
    try_concurrently,
)
from tests.fakes import Failure, PromiseFactory, expect_error, expect_ok


# Immediate resolution


def test_immediate_main_only(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.ok("1"))
    assert expect_ok(c()) == "1"
    assert pf.finish() == ["1"]


def test_immediate_necessary_push_runs_before_main(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.ok("1")).necessary_push(pf.ok("2"))
    assert expect_ok(c()) == "1"
    assert pf.finish() == ["2", "1"]


def test_immediate_necessary_pull_runs_after_main(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.ok("1")).necessary_pull(pf.ok("2"))
    assert expect_ok(c()) == "1"
    assert pf.finish() == ["1", "2"]


def test_immediate_push_and_pull_added_in_any_order(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.ok("1")).necessary_pull(pf.ok("2")).necessary_push(pf.ok("3"))
    assert expect_ok(c()) == "1"
    assert pf.finish() == ["3", "1", "2"]


def test_optional_push_never_resolving_does_not_block(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.ok("1")).push(pf.never("2"))
    assert expect_ok(c()) == "1"
    assert pf.finish() == ["2", "1"]


def test_optional_pull_never_resolving_does_not_block(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.ok("1")).pull(pf.never("2"))
    assert expect_ok(c()) == "1"
    assert pf.finish() == ["1", "2"]


def test_result_is_main_value_not_side_value(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.ok("main", value=42)).necessary_push(pf.ok("side", value=7))
    assert expect_ok(c()) == 42


# Paused


def test_pending_main_keeps_combinator_pending(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.never("1"))
    assert c() == PENDING
    assert pf.finish() == ["1"]
    assert c.state is State.RUNNING


def test_pending_necessary_push_blocks_finish(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.ok("1")).necessary_push(pf.never("2"))
    assert c() == PENDING
    assert pf.finish() == ["2", "1"]


def test_pending_necessary_pull_blocks_finish(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.ok("1")).necessary_pull(pf.never("2"))
    assert c() == PENDING
    assert pf.finish() == ["1", "2"]


def test_resolved_main_not_polled_again(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.ok("main")).necessary_pull(
        pf.script("pull", PENDING, Ready(Ok(None)))
    )
    assert c() == PENDING
    assert pf.finish() == ["main", "pull"]
    assert expect_ok(c()) == "main"
    assert pf.finish() == ["pull"]


def test_resolved_side_entries_are_dropped(pf: PromiseFactory) -> None:
    c = (
        try_concurrently(pf.script("main", PENDING, PENDING, Ready(Ok("done"))))
        .necessary_push(pf.ok("a"))
        .necessary_push(pf.script("b", PENDING, Ready(Ok(None))))
        .push(pf.ok("c"))
    )
    assert c() == PENDING
    assert pf.finish() == ["a", "b", "c", "main"]
    assert c.pending_sides()["necessary_push"] == 1
    assert c() == PENDING
    assert pf.finish() == ["b", "main"]
    assert c.pending_sides()["necessary_push"] == 0
    assert expect_ok(c()) == "done"
    assert pf.finish() == ["main"]


# Failures


def test_main_failure(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.fail("bah"))
    assert expect_error(c()) == Failure("bah")
    assert pf.finish() == ["bah"]


def test_necessary_push_failure_preempts_main(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.never("1")).necessary_push(pf.fail("humbug"))
    assert expect_error(c()) == Failure("humbug")
    assert pf.finish() == ["humbug"]


def test_necessary_pull_failure_while_main_pending(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.never("1")).necessary_pull(pf.fail("wha"))
    assert expect_error(c()) == Failure("wha")
    assert pf.finish() == ["1", "wha"]


def test_first_necessary_push_failure_wins(pf: PromiseFactory) -> None:
    c = (
        try_concurrently(pf.ok("main"))
        .necessary_push(pf.never("slow"))
        .necessary_push(pf.fail("first"))
        .necessary_push(pf.fail("second"))
    )
    assert expect_error(c()) == Failure("first")
    assert pf.finish() == ["slow", "first"]


def test_main_failure_outranks_necessary_pull_failure_in_same_round(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.fail("main")).necessary_pull(pf.fail("pull"))
    assert expect_error(c()) == Failure("main")
    assert pf.finish() == ["main"]


def test_necessary_push_failure_outranks_main_failure(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.fail("main")).necessary_push(pf.fail("push"))
    assert expect_error(c()) == Failure("push")
    assert pf.finish() == ["push"]


def test_optional_failures_are_ignored(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.ok("main")).push(pf.fail("p")).pull(pf.fail("q"))
    assert expect_ok(c()) == "main"
    assert pf.finish() == ["p", "main", "q"]


def test_optional_sides_may_resolve_to_anything(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.ok("main")).push(L.ready("not a result")).pull(L.ready(123))
    assert expect_ok(c()) == "main"


def test_error_is_passed_through_verbatim() -> None:
    error = Failure("exact")
    c = try_concurrently(L.never()).necessary_pull(L.fail(error))
    assert expect_error(c()) is error


def test_later_failure_after_pending_rounds(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.never("main")).necessary_push(
        pf.script("auth", PENDING, Ready(Error(Failure("denied"))))
    )
    assert c() == PENDING
    assert pf.finish() == ["auth", "main"]
    assert expect_error(c()) == Failure("denied")
    assert pf.finish() == ["auth"]


def test_main_resolving_to_non_result_is_a_contract_violation() -> None:
    c = try_concurrently(L.ready("plain"))
    with pytest.raises(NotAResultError):
        c()


def test_necessary_side_resolving_to_non_result_is_a_contract_violation() -> None:
    c = try_concurrently(L.never()).necessary_push(L.ready(1))
    with pytest.raises(NotAResultError):
        c()


# Scenarios


def test_scenario_pull_resolves_on_second_round(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.ok("x")).necessary_pull(pf.script("pull", PENDING, Ready(Ok("y"))))
    assert c() == PENDING
    assert pf.finish() == ["x", "pull"]
    assert expect_ok(c()) == "x"


def test_many_sides_in_every_category(pf: PromiseFactory) -> None:
    c = (
        try_concurrently(pf.ok("main"))
        .pull(pf.ok("op1"))
        .necessary_pull(pf.ok("np1"))
        .push(pf.ok("o1"))
        .necessary_push(pf.ok("n1"))
        .necessary_pull(pf.ok("np2"))
        .push(pf.ok("o2"))
        .necessary_push(pf.ok("n2"))
        .pull(pf.ok("op2"))
    )
    assert expect_ok(c()) == "main"
    assert pf.finish() == ["n1", "n2", "o1", "o2", "main", "np1", "np2", "op1", "op2"]


# Lifecycle


def test_done_is_terminal(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.ok("1"))
    c()
    assert c.state is State.DONE
    match c.outcome:
        case Ok(value):
            assert value == "1"
        case other:
            pytest.fail(f"unexpected {other!r}")
    with pytest.raises(PollAfterDoneError):
        c()
    with pytest.raises(PollAfterDoneError):
        c.push(pf.never("late"))


def test_outcome_is_none_while_running(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.never("1"))
    c()
    assert c.outcome is None


def test_builder_consumes_source(pf: PromiseFactory) -> None:
    a = try_concurrently(pf.ok("1"))
    b = a.push(pf.never("2"))
    assert a.state is State.MOVED
    with pytest.raises(CombinatorMovedError):
        a()
    with pytest.raises(CombinatorMovedError):
        a.pull(pf.never("3"))
    assert expect_ok(b()) == "1"


def test_moved_combinator_polls_the_same_promises(pf: PromiseFactory) -> None:
    a = try_concurrently(pf.ok("1")).necessary_pull(pf.never("2"))
    assert a() == PENDING
    b = a.move()
    assert b() == PENDING
    assert pf.finish() == ["1", "2", "2"]


def test_constructor_and_function_are_equivalent(pf: PromiseFactory) -> None:
    c = TryConcurrently(pf.ok("1"))
    assert isinstance(c, TryConcurrently)
    assert expect_ok(c()) == "1"


def test_repr_mentions_state_and_counts(pf: PromiseFactory) -> None:
    c = try_concurrently(pf.never("1")).push(pf.never("2"))
    text = repr(c)
    assert "running" in text
    assert "optional_push=1" in text


def test_promise_returning_non_poll_is_a_contract_violation() -> None:
    c = try_concurrently(lambda: "oops")
    with pytest.raises(ContractViolationError):
        c()
