from gridpath.render.terminal_input import (
    MOUSE_LEFT,
    MOUSE_RIGHT,
    InputDecoder,
    InputEvent,
)


def decode(data: str, *, now: float = 0.0) -> list[InputEvent]:
    decoder = InputDecoder()
    decoder.feed(data)
    events = []
    while True:
        event = decoder.next_event(now=now)
        if event is None:
            return events
        events.append(event)


def test_plain_and_named_keys() -> None:
    events = decode("w \r")

    assert [event.key for event in events] == ["w", "SPACE", "ENTER"]
    assert all(event.kind == "key" for event in events)


def test_arrow_keys_in_csi_and_ss3_form() -> None:
    events = decode("\x1b[A\x1b[B\x1bOC\x1bOD")

    assert [event.key for event in events] == ["UP", "DOWN", "RIGHT", "LEFT"]


def test_mouse_press_is_zero_based_and_release_is_dropped() -> None:
    events = decode("\x1b[<0;5;3M\x1b[<0;5;3m\x1b[<2;1;1M")

    assert events == [
        InputEvent(kind="mouse", x=4, y=2, button=MOUSE_LEFT),
        InputEvent(kind="mouse", x=0, y=0, button=MOUSE_RIGHT),
    ]


def test_partial_sequence_waits_for_more_input() -> None:
    decoder = InputDecoder()
    decoder.feed("\x1b[<0;5")

    assert decoder.next_event(now=0.0) is None

    decoder.feed(";3M")
    assert decoder.next_event(now=0.0) == InputEvent(
        kind="mouse", x=4, y=2, button=MOUSE_LEFT
    )


def test_lone_escape_needs_timeout() -> None:
    decoder = InputDecoder()
    decoder.feed("\x1b")

    assert decoder.next_event(now=1.0) is None
    assert decoder.next_event(now=1.01) is None
    assert decoder.next_event(now=1.2) == InputEvent(kind="key", key="ESC")


def test_unknown_sequences_are_skipped() -> None:
    assert [event.key for event in decode("\x1b[3~q")] == ["q"]
