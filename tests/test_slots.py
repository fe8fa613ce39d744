from try_concurrently import Necessity, SideEntry, SideSlots, Timing, lift as L


def _entry(timing: Timing, necessity: Necessity) -> SideEntry[str]:
    return SideEntry(L.never(), timing=timing, necessity=necessity)


def test_drain_empties_every_list_push_first() -> None:
    slots: SideSlots[str] = SideSlots()
    pull = _entry(Timing.PULL, Necessity.OPTIONAL)
    first = _entry(Timing.PUSH, Necessity.NECESSARY)
    second = _entry(Timing.PUSH, Necessity.NECESSARY)
    optional = _entry(Timing.PUSH, Necessity.OPTIONAL)
    for entry in (pull, first, second, optional):
        slots.add(entry)

    assert list(slots.drain()) == [first, second, optional, pull]
    assert set(slots.counts().values()) == {0}


def test_drain_optional_leaves_necessary_entries() -> None:
    slots: SideSlots[str] = SideSlots()
    necessary = _entry(Timing.PULL, Necessity.NECESSARY)
    optional_push = _entry(Timing.PUSH, Necessity.OPTIONAL)
    optional_pull = _entry(Timing.PULL, Necessity.OPTIONAL)
    for entry in (necessary, optional_pull, optional_push):
        slots.add(entry)

    assert list(slots.drain_optional()) == [optional_push, optional_pull]
    assert slots.necessary_pull == [necessary]
    assert not slots.necessary_done()
