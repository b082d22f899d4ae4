"""Session logging helpers (JSONL)."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

from pydantic import ValidationError

from gridpath.core.contracts import CommandOutcome

SCHEMA_VERSION = 1
SESSION_LOG_NAME = "session.jsonl"


def create_session_folder(
    base_dir: Path, *, timestamp: str | None = None
) -> tuple[Path, Path]:
    """Create a fresh folder; a clashing name gets a ``-N`` suffix."""
    session_id = timestamp or _format_timestamp(datetime.now(timezone.utc))
    base_dir.mkdir(parents=True, exist_ok=True)
    session_dir = base_dir / session_id
    suffix = 0
    while True:
        try:
            session_dir.mkdir()
        except FileExistsError:
            suffix += 1
            session_dir = base_dir / f"{session_id}-{suffix}"
            continue
        return session_dir, session_dir / SESSION_LOG_NAME


def write_header(path: Path, metadata: dict[str, Any]) -> None:
    record: dict[str, Any] = {
        "type": "header",
        "schema_version": SCHEMA_VERSION,
        "metadata": metadata,
    }
    _append_record(path, record)


def append_outcome(path: Path, outcome: CommandOutcome) -> None:
    record: dict[str, Any] = {
        "type": "command",
        "schema_version": SCHEMA_VERSION,
        "outcome": outcome.model_dump(mode="json"),
    }
    _append_record(path, record)


def read_outcomes(path: Path) -> Iterator[CommandOutcome]:
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            record = _parse_record(line)
            if not record or record.get("type") != "command":
                continue
            outcome = record.get("outcome")
            if outcome is None:
                continue
            try:
                yield CommandOutcome.model_validate(outcome)
            except ValidationError:
                continue


class SessionLog:
    """Append outcomes to one session file; usable as a controller hook."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def start(
        cls, base_dir: Path, *, width: int, height: int, timestamp: str | None = None
    ) -> "SessionLog":
        session_dir, log_path = create_session_folder(base_dir, timestamp=timestamp)
        write_header(
            log_path,
            metadata={
                "session_id": session_dir.name,
                "width": width,
                "height": height,
            },
        )
        return cls(log_path)

    def __call__(self, outcome: CommandOutcome) -> None:
        append_outcome(self.path, outcome)


def _append_record(path: Path, record: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record))
        handle.write("\n")


def _parse_record(line: str) -> dict | None:
    try:
        return json.loads(line)
    except json.JSONDecodeError:
        return None


def _format_timestamp(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H-%M-%SZ")
