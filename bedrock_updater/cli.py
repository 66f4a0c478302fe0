"""Command line entry point for the Bedrock server updater."""

from __future__ import annotations

import argparse
import sys
import time
from typing import Optional, Sequence

from .config import ConfigError, load_config
from .downloader import UpdateError, default_symlink_updater, update_server_if_new
from .version import VersionLookupError

__all__ = ["main"]


def _fatal(message: str) -> int:
    print(f"{time.strftime('%Y/%m/%d %H:%M:%S')} {message}", file=sys.stderr)
    return 1


def _read_current_version(path: str) -> str:
    try:
        with open(path, encoding="utf-8") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError):
        return ""


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Check for a new server release and install it; return the exit status."""
    parser = argparse.ArgumentParser(
        prog="bedrock-updater",
        description="Install the latest Bedrock dedicated server release.",
    )
    parser.add_argument(
        "-config",
        "--config",
        dest="config",
        default="config.json",
        help="Path to config file",
    )
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config)
    except ConfigError as exc:
        return _fatal(f"Failed to load config: {exc}")

    print(f"Loaded config: {cfg}")

    current = _read_current_version(cfg.last_version_file) if cfg.last_version_file else ""

    try:
        updated = update_server_if_new(current, cfg, default_symlink_updater)
    except (UpdateError, VersionLookupError, OSError) as exc:
        return _fatal(f"Update failed: {exc}")

    if updated:
        print("Update completed successfully.")
    else:
        print("No update needed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())