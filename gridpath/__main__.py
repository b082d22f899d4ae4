"""Module entry point for `python -m gridpath`."""

from __future__ import annotations

import argparse
from pathlib import Path

from gridpath.app import UI_CHOICES, resolve_config, run_app


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Paint walls on a grid and find the shortest route."
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Grid width in cells (default 40, or GRIDPATH_WIDTH).",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Grid height in cells (default 30, or GRIDPATH_HEIGHT).",
    )
    parser.add_argument(
        "--ui",
        choices=UI_CHOICES,
        default=None,
        help="Front end: textual (default) or rich.",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Write a JSONL session log under this directory.",
    )
    args = parser.parse_args(argv)

    try:
        config = resolve_config(
            width=args.width, height=args.height, ui=args.ui, log_dir=args.log_dir
        )
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    controller = run_app(config)
    if controller.last_outcome is not None and config.log_dir is not None:
        print(f"Session saved under {config.log_dir}")


if __name__ == "__main__":
    main()
