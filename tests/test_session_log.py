import json
from pathlib import Path

from gridpath.core.contracts import PlaceEndpoint, RunSearch, ToggleWall
from gridpath.core.controller import SessionController
from gridpath.core.grid_store import GridStore
from gridpath.db.session_log import (
    SESSION_LOG_NAME,
    SessionLog,
    create_session_folder,
    read_outcomes,
    write_header,
)


def test_session_log_header_and_commands(tmp_path: Path) -> None:
    log = SessionLog.start(tmp_path, width=4, height=3, timestamp="2026-10-17T09-00-00Z")
    controller = SessionController(GridStore(4, 3), on_record=log)

    controller.dispatch(PlaceEndpoint(x=0, y=0))
    controller.dispatch(PlaceEndpoint(x=3, y=0))
    controller.dispatch(RunSearch())

    with log.path.open("r", encoding="utf-8") as handle:
        records = [json.loads(line) for line in handle]

    assert log.path.name == SESSION_LOG_NAME
    assert log.path.parent.name == "2026-10-17T09-00-00Z"
    assert records[0]["type"] == "header"
    assert records[0]["metadata"] == {
        "session_id": "2026-10-17T09-00-00Z",
        "width": 4,
        "height": 3,
    }
    assert [record["type"] for record in records[1:]] == ["command"] * 3
    assert records[3]["outcome"]["command"]["kind"] == "run_search"
    assert records[3]["outcome"]["search"]["result"] == "found"
    assert records[3]["outcome"]["search"]["path_length"] == 3


def test_read_outcomes_skips_header_and_bad_lines(tmp_path: Path) -> None:
    _, log_path = create_session_folder(tmp_path, timestamp="2026-10-17T09-05-00Z")
    write_header(log_path, metadata={"session_id": "s"})
    log = SessionLog(log_path)
    controller = SessionController(GridStore(2, 2), on_record=log)
    controller.dispatch(ToggleWall(x=1, y=1))
    with log_path.open("a", encoding="utf-8") as handle:
        handle.write("not json\n")
        handle.write(json.dumps({"type": "command", "outcome": {"accepted": True}}) + "\n")
    controller.dispatch(ToggleWall(x=5, y=5))

    outcomes = list(read_outcomes(log_path))

    assert len(outcomes) == 2
    assert outcomes[0].command == ToggleWall(x=1, y=1)
    assert outcomes[0].accepted
    assert not outcomes[1].accepted
    assert outcomes[1].error == "out_of_bounds"


def test_sessions_started_in_same_second_get_separate_logs(tmp_path: Path) -> None:
    stamp = "2026-10-17T09-10-00Z"
    first = SessionLog.start(tmp_path, width=2, height=2, timestamp=stamp)
    second = SessionLog.start(tmp_path, width=3, height=3, timestamp=stamp)
    SessionController(GridStore(2, 2), on_record=first).dispatch(ToggleWall(x=0, y=0))
    SessionController(GridStore(3, 3), on_record=second).dispatch(ToggleWall(x=2, y=2))

    assert first.path.parent.name == stamp
    assert second.path.parent.name == f"{stamp}-1"
    for log in (first, second):
        with log.path.open("r", encoding="utf-8") as handle:
            records = [json.loads(line) for line in handle]
        assert [record["type"] for record in records] == ["header", "command"]
    assert [outcome.command for outcome in read_outcomes(second.path)] == [
        ToggleWall(x=2, y=2)
    ]
