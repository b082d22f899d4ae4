"""Application entry for running the visualizer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from gridpath.core.controller import SessionController
from gridpath.core.grid_store import GridStore
from gridpath.db.session_log import SessionLog

# 800x600 window at 20-pixel cells
DEFAULT_WIDTH = 40
DEFAULT_HEIGHT = 30
DEFAULT_UI = "textual"
UI_CHOICES = ("textual", "rich")


@dataclass(frozen=True)
class GridConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    ui: str = DEFAULT_UI
    log_dir: Path | None = None


def resolve_config(
    *,
    width: int | None = None,
    height: int | None = None,
    ui: str | None = None,
    log_dir: Path | None = None,
) -> GridConfig:
    resolved_width = _resolve_dimension(width, "GRIDPATH_WIDTH", DEFAULT_WIDTH)
    resolved_height = _resolve_dimension(height, "GRIDPATH_HEIGHT", DEFAULT_HEIGHT)
    resolved_ui = (ui or os.getenv("GRIDPATH_UI") or DEFAULT_UI).lower()
    if resolved_ui not in UI_CHOICES:
        raise ValueError(f"Unknown UI {resolved_ui!r}; choose one of {', '.join(UI_CHOICES)}.")
    env_log_dir = os.getenv("GRIDPATH_LOG_DIR")
    resolved_log_dir = log_dir or (Path(env_log_dir) if env_log_dir else None)
    return GridConfig(
        width=resolved_width,
        height=resolved_height,
        ui=resolved_ui,
        log_dir=resolved_log_dir,
    )


def build_controller(config: GridConfig) -> SessionController:
    grid = GridStore(config.width, config.height)
    on_record = None
    if config.log_dir is not None:
        on_record = SessionLog.start(
            config.log_dir, width=config.width, height=config.height
        )
    return SessionController(grid, on_record=on_record)


def run_app(config: GridConfig) -> SessionController:
    controller = build_controller(config)
    if config.ui == "rich":
        from gridpath.render.visualizer import run_visualizer

        run_visualizer(controller)
    else:
        from gridpath.render.grid_screen import run_grid_app

        run_grid_app(controller)
    return controller


def _resolve_dimension(value: int | None, env_name: str, default: int) -> int:
    if value is None:
        raw = os.getenv(env_name)
        if raw is None or raw == "":
            value = default
        else:
            try:
                value = int(raw)
            except ValueError as exc:
                raise ValueError(f"{env_name} must be an integer, got {raw!r}.") from exc
    if value < 1:
        raise ValueError(f"Grid dimensions must be positive, got {value}.")
    return value
