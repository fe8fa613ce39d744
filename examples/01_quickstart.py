from __future__ import annotations

from _infra import AuthCheck, MetricsSink, SlowHandler, banner

from kungfu import Error, Ok
from try_concurrently import Pending, Ready, deadline, try_concurrently


def drive(call) -> None:
    # Stand-in for a real scheduler: re-poll until ready.
    rounds = 0
    while True:
        rounds += 1
        match call():
            case Pending():
                continue
            case Ready(Ok(body)):
                print(f"ok after {rounds} round(s): {body}")
            case Ready(Error(err)):
                print(f"failed after {rounds} round(s): {err}")
        return


def main() -> None:
    banner("01_quickstart: authorization push + metrics pull + deadline")

    metrics = MetricsSink()
    call = (
        try_concurrently(SlowHandler(rounds_needed=2, body="hello"))
        .necessary_push(AuthCheck(token="secret"))
        .necessary_pull(deadline(1.0))
        .pull(metrics)
    )
    drive(call)
    print(f"metrics polled {len(metrics.events)} time(s), released: {metrics.closed}")

    banner("01_quickstart: rejected token short-circuits main")
    drive(try_concurrently(SlowHandler(rounds_needed=2, body="never seen")).necessary_push(AuthCheck(token="guess")))


if __name__ == "__main__":
    main()
