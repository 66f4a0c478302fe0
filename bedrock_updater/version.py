"""Discovery of the latest Bedrock dedicated server release from the wiki."""

from __future__ import annotations

import re
import time
import urllib.error
import urllib.request

__all__ = [
    "VersionLookupError",
    "get_latest_bedrock_version",
    "parse_bedrock_version",
    "parse_bedrock_version_and_url",
]

DEFAULT_WIKI_URL = "https://minecraft.wiki/"
USER_AGENT = "Mozilla/5.0"
ATTEMPTS = 3

_NAV_MARKER = '<li id="n-Bedrock-Edition"'
_NAV_MARKER_FULL = (
    '<li id="n-Bedrock-Edition" class="mw-list-item"><a href="/w/Bedrock_Edition" '
    'title="Bedrock Edition"><span>Bedrock Edition</span></a></li>'
)
_NAV_TEXT = ">Bedrock Edition<"
_LATEST_STRICT = re.compile(
    r'<li id="n-Latest:-([\d.]+)"[^>]*><a href="([^"]+)"[^>]*>'
    r"<span>Latest: [\d.]+</span></a></li>"
)
_LATEST_LOOSE = re.compile(
    r'<li id="n-Latest:-([\d.]+)"[^>]*><a href="([^"]+)"[^>]*>.*?</a></li>'
)
_WINDOWS_LINK = re.compile(
    r'<a[^>]+href="([^"]*bedrockdedicatedserver/bin-win/bedrock-server-[\d.]+\.zip)"'
    r"[^>]*>Windows</a>"
)
_ZIP_NAME = re.compile(r"bedrock-server-([\d.]+)\.zip")
_ZIP_HREF = re.compile(r"""href=['"]([^'"]*bedrock-server-([\d.]+)\.zip)['"]""")


class VersionLookupError(Exception):
    """Raised when the latest version or its download link cannot be found."""


def _fetch(url: str) -> str:
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(request) as response:
            status = response.status
            body = response.read()
    except urllib.error.HTTPError as exc:
        raise VersionLookupError(f"unexpected status code: {exc.code}") from exc
    if status != 200:
        raise VersionLookupError(f"unexpected status code: {status}")
    return body.decode("utf-8", errors="replace")


def _latest_from_nav(wiki_nav_url: str) -> tuple[str, str]:
    nav = _fetch(wiki_nav_url)

    index = nav.find(_NAV_MARKER)
    if index == -1:
        index = nav.find(_NAV_MARKER_FULL)
    if index == -1:
        index = nav.find(_NAV_TEXT)
        if index == -1:
            if _LATEST_LOOSE.search(nav):
                index = 0
            else:
                raise VersionLookupError("Bedrock Edition section not found in wiki nav")

    nav = nav[index:]
    match = _LATEST_STRICT.search(nav) or _LATEST_LOOSE.search(nav)
    if match is None:
        raise VersionLookupError("latest bedrock version not found in wiki nav")
    version, page_path = match.group(1), match.group(2)

    base = wiki_nav_url
    if base.startswith(("http://", "https://")) and base.endswith("/"):
        base = base[:-1]

    page_url = page_path if page_path.startswith("http") else base + page_path
    return version, page_url


def _download_link_from_page(page_url: str) -> str:
    match = _WINDOWS_LINK.search(_fetch(page_url))
    if match is None:
        raise VersionLookupError("bedrock server download link not found in wiki page")
    return match.group(1)


def get_latest_bedrock_version(wiki_nav_url: str = "") -> tuple[str, str]:
    """Return ``(version, zip_url)`` of the latest Bedrock server release.

    The wiki is tried up to three times, waiting a little longer after each
    failure.
    """
    if not wiki_nav_url:
        wiki_nav_url = DEFAULT_WIKI_URL

    last_error: Exception | None = None
    for attempt in range(ATTEMPTS):
        try:
            version, page_url = _latest_from_nav(wiki_nav_url)
            zip_url = _download_link_from_page(page_url)
        except (VersionLookupError, OSError, ValueError) as exc:
            last_error = exc
        else:
            if version and zip_url:
                return version, zip_url
        time.sleep(1 + attempt)

    raise VersionLookupError(
        f"update check failed - version info is unavailable: {last_error}"
    ) from last_error


def parse_bedrock_version(s: str) -> str:
    """Extract the version from a ``bedrock-server-<version>.zip`` name, or ''."""
    match = _ZIP_NAME.search(s)
    return match.group(1) if match else ""


def parse_bedrock_version_and_url(base_url: str, body: str) -> tuple[str, str]:
    """Find the first server zip link in ``body`` and return ``(version, zip_url)``."""
    match = _ZIP_HREF.search(body)
    if match is None:
        raise VersionLookupError("version or zip url not found in page")
    return match.group(2), match.group(1)