"""Core data contracts: cell states, errors, commands and outcomes."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

Coord = tuple[int, int]


class CellState(str, Enum):
    EMPTY = "empty"
    WALL = "wall"
    START = "start"
    TARGET = "target"
    PATH = "path"


class PathResult(str, Enum):
    FOUND = "found"
    NO_ROUTE = "no_route"


class GridError(ValueError):
    """Base class for recoverable grid errors reported to callers."""

    kind = "grid_error"


class OutOfBounds(GridError, IndexError):
    kind = "out_of_bounds"

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"({x}, {y}) is outside the {width}x{height} grid")
        self.x = x
        self.y = y


class InvalidPlacement(GridError):
    kind = "invalid_placement"


class InvalidEndpoints(GridError):
    kind = "invalid_endpoints"


class ToggleWall(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["toggle_wall"] = "toggle_wall"
    x: int
    y: int


class PlaceStart(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["place_start"] = "place_start"
    x: int
    y: int


class PlaceTarget(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["place_target"] = "place_target"
    x: int
    y: int


class PlaceEndpoint(BaseModel):
    """Place the Start if absent, otherwise the Target."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["place_endpoint"] = "place_endpoint"
    x: int
    y: int


class RunSearch(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["run_search"] = "run_search"


class Reset(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["reset"] = "reset"


Command = Annotated[
    Union[ToggleWall, PlaceStart, PlaceTarget, PlaceEndpoint, RunSearch, Reset],
    Field(discriminator="kind"),
]

_COMMAND_ADAPTER: TypeAdapter[Command] = TypeAdapter(Command)


class SearchReport(BaseModel):
    model_config = ConfigDict(extra="forbid")

    result: PathResult
    path_length: int | None = None
    path_cells: list[Coord] = Field(default_factory=list)


class CommandOutcome(BaseModel):
    model_config = ConfigDict(extra="forbid")

    command: Command
    accepted: bool
    error: str | None = None
    message: str | None = None
    search: SearchReport | None = None


def coerce_command(raw: Any) -> Command | None:
    """Validate a raw command payload, or return None when it is malformed."""
    try:
        return _COMMAND_ADAPTER.validate_python(raw)
    except ValidationError:
        return None
