"""Loading of the updater's JSON configuration file."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from os import PathLike
from typing import Any, Union

__all__ = ["Config", "ConfigError", "load_config"]


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or decoded."""


@dataclass
class Config:
    """Settings for the server updater."""

    server_dir: str = ""
    network_share: str = ""
    wiki_nav_url: str = ""
    last_version_file: str = ""


def _apply(document: dict[str, Any]) -> Config:
    values: dict[str, str] = {}
    names = [f.name for f in fields(Config)]
    for key, value in document.items():
        # Exact key names win; otherwise keys are matched without regard to case.
        if key in names:
            name = key
        else:
            name = next((n for n in names if n.lower() == key.lower()), None)
            if name is None or name in document:
                continue
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigError(
                f"failed to decode config: field {key!r} must be a string, "
                f"got {type(value).__name__}"
            )
        values[name] = value
    return Config(**values)


def load_config(path: Union[str, PathLike]) -> Config:
    """Read a Config from the JSON document at ``path``.

    Only the first JSON value in the file is decoded; unknown keys are ignored
    and missing keys keep their empty defaults.
    """
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"failed to open config file: {exc}") from exc

    try:
        document, _ = json.JSONDecoder().raw_decode(text.lstrip())
    except json.JSONDecodeError as exc:
        raise ConfigError(f"failed to decode config: {exc}") from exc

    if document is None:
        return Config()
    if not isinstance(document, dict):
        raise ConfigError(
            f"failed to decode config: expected an object, got {type(document).__name__}"
        )
    return _apply(document)