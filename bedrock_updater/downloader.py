"""Downloading, unpacking and installing new Bedrock server releases."""

from __future__ import annotations

import os
import shutil
import stat
import urllib.error
import urllib.request
import zipfile
from typing import Callable, Iterator, Tuple, Union

from .config import Config
from .version import USER_AGENT, get_latest_bedrock_version, parse_bedrock_version

__all__ = [
    "SymlinkUpdater",
    "UpdateError",
    "copy_dir",
    "default_symlink_updater",
    "download_file",
    "extract_zip",
    "update_server_if_new",
]

SERVER_DIR_PREFIX = "bedrock-server-"
LATEST_LINK = "Latest"
WORLDS_DIR = "worlds"

SymlinkUpdater = Callable[[str, str], None]
StrPath = Union[str, "os.PathLike[str]"]

# Zip "version made by" host systems whose external attributes carry Unix modes.
_UNIX_CREATORS = (3, 19)
_MSDOS_READONLY = 0x01
_MSDOS_DIRECTORY = 0x10


class UpdateError(Exception):
    """Raised when a step of installing a new server release fails."""


def download_file(path: StrPath, url: str) -> None:
    """Fetch ``url`` and write the response body to ``path``.

    The body is written whatever the response status is.
    """
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    with open(path, "wb") as out:
        try:
            response = urllib.request.urlopen(request)
        except urllib.error.HTTPError as exc:
            response = exc
        with response:
            shutil.copyfileobj(response, out)


def default_symlink_updater(target: StrPath, link: StrPath) -> None:
    """Point ``link`` at ``target``, replacing whatever ``link`` was before."""
    try:
        os.unlink(link)
    except OSError:
        try:
            os.rmdir(link)
        except OSError:
            pass
    os.symlink(target, link)


def _walk(root: str) -> Iterator[Tuple[str, os.stat_result]]:
    """Yield ``root`` and everything below it in lexical order, not following links."""
    info = os.lstat(root)
    yield root, info
    if stat.S_ISDIR(info.st_mode):
        for name in sorted(os.listdir(root)):
            yield from _walk(os.path.join(root, name))


def _copy_file(src: str, dst: str, mode: int) -> None:
    fd = os.open(dst, os.O_CREAT | os.O_WRONLY | os.O_TRUNC | getattr(os, "O_BINARY", 0), mode)
    with os.fdopen(fd, "wb") as out, open(src, "rb") as source:
        shutil.copyfileobj(source, out)


def copy_dir(src: StrPath, dst: StrPath) -> None:
    """Copy the tree at ``src`` into ``dst``, keeping permission bits."""
    src = os.fspath(src)
    dst = os.fspath(dst)
    for path, info in _walk(src):
        target = os.path.normpath(os.path.join(dst, os.path.relpath(path, src)))
        mode = stat.S_IMODE(info.st_mode)
        if stat.S_ISDIR(info.st_mode):
            os.makedirs(target, mode=mode, exist_ok=True)
            continue
        parent = os.path.dirname(target)
        if parent:
            os.makedirs(parent, exist_ok=True)
        _copy_file(path, target, mode)


def _entry_mode(entry: zipfile.ZipInfo) -> int:
    if entry.create_system in _UNIX_CREATORS:
        return (entry.external_attr >> 16) & 0o777
    return 0o444 if entry.external_attr & _MSDOS_READONLY else 0o666


def _entry_is_dir(entry: zipfile.ZipInfo) -> bool:
    if entry.is_dir():
        return True
    if entry.create_system in _UNIX_CREATORS:
        return stat.S_ISDIR(entry.external_attr >> 16)
    return bool(entry.external_attr & _MSDOS_DIRECTORY)


def extract_zip(zip_path: StrPath, target_dir: StrPath) -> None:
    """Unpack every entry of the archive at ``zip_path`` below ``target_dir``."""
    target_dir = os.fspath(target_dir)
    with zipfile.ZipFile(zip_path) as archive:
        for entry in archive.infolist():
            path = os.path.normpath(os.path.join(target_dir, entry.filename))
            if _entry_is_dir(entry):
                os.makedirs(path, exist_ok=True)
                continue
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            fd = os.open(
                path,
                os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0),
                _entry_mode(entry),
            )
            with os.fdopen(fd, "wb") as out, archive.open(entry) as source:
                shutil.copyfileobj(source, out)


def _previous_worlds(server_dir: str, new_dir_name: str) -> str:
    """Return the worlds folder of the last older server directory, or ''."""
    try:
        entries = sorted(os.scandir(server_dir), key=lambda e: e.name)
    except OSError:
        return ""
    found = ""
    for entry in entries:
        if (
            entry.is_dir(follow_symlinks=False)
            and entry.name.startswith(SERVER_DIR_PREFIX)
            and entry.name != new_dir_name
        ):
            candidate = os.path.join(server_dir, entry.name, WORLDS_DIR)
            if os.path.exists(candidate):
                found = candidate
    return found


def update_server_if_new(
    current: str,
    cfg: Config,
    symlink_updater: SymlinkUpdater = default_symlink_updater,
) -> bool:
    """Install the latest server release unless ``current`` already is it.

    Returns True when a new release was installed and False when none was
    needed. The worlds of the previous install are carried over, and the
    ``Latest`` link is pointed at the new release through ``symlink_updater``.
    """
    server_dir = cfg.server_dir
    try:
        os.makedirs(server_dir, exist_ok=True)
    except OSError as exc:
        raise UpdateError(f"failed to create server dir: {exc}") from exc

    version, zip_url = get_latest_bedrock_version(cfg.wiki_nav_url)
    if current == version:
        return False

    zip_name = os.path.basename(zip_url.rstrip("/")) or "."
    zip_path = os.path.join(server_dir, zip_name)
    try:
        download_file(zip_path, zip_url)
    except (OSError, ValueError) as exc:
        raise UpdateError(f"failed to download: {exc}") from exc

    new_dir_name = SERVER_DIR_PREFIX + parse_bedrock_version(zip_name)
    extract_dir = os.path.join(server_dir, new_dir_name)
    try:
        os.makedirs(extract_dir, exist_ok=True)
    except OSError as exc:
        raise UpdateError(f"failed to create extract dir: {exc}") from exc
    try:
        extract_zip(zip_path, extract_dir)
    except (OSError, zipfile.BadZipFile) as exc:
        raise UpdateError(f"failed to extract: {exc}") from exc

    dst_worlds = os.path.join(extract_dir, WORLDS_DIR)
    src_worlds = os.path.join(server_dir, LATEST_LINK, WORLDS_DIR)
    if not os.path.exists(src_worlds):
        src_worlds = _previous_worlds(server_dir, new_dir_name) or src_worlds

    if os.path.exists(src_worlds):
        try:
            copy_dir(src_worlds, dst_worlds)
        except OSError as exc:
            raise UpdateError(f"failed to copy worlds: {exc}") from exc

    latest_link = os.path.join(server_dir, LATEST_LINK)
    try:
        symlink_updater(extract_dir, latest_link)
    except Exception as exc:
        raise UpdateError(f"failed to update symlink: {exc}") from exc
    return True