"""CLI entrypoint for relaybus."""

from __future__ import annotations

import argparse
from importlib import metadata
from pathlib import Path
from typing import Sequence

from .app import EventBusDemoApp
from .config import config_path_from_env, ensure_config_dir, load_config
from .logging_utils import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="relaybus", description="Event bus demo TUI")
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a config.toml (defaults to $RELAYBUS_CONFIG or the user config dir)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Handle CLI flags, load configuration, and run the demo."""

    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.version:
        try:
            version = metadata.version("relaybus")
        except metadata.PackageNotFoundError:
            version = "0.0.0"
        print(f"relaybus {version}")
        return

    config_path = args.config or config_path_from_env()
    if config_path is None:
        ensure_config_dir()
    config = load_config(config_path=config_path)
    configure_logging(config["logging"])
    app = EventBusDemoApp(config=config)
    app.run()


if __name__ == "__main__":
    main()
