"""Work out which test harness a data file belongs to."""
from typing import Optional, Tuple

from timingsclient.constants import DEFAULT_HARNESS, GENERIC_FILENAME, TRY_REVISION_RE


def select_harness(filename: str, kind: Optional[str] = None) -> str:
    """Return the harness to fetch ``filename`` for.

    ``mochitest-*`` files are mochitest data. ``index.json`` is shared by
    both harnesses, so the page's ``kind`` picks one. Everything else is
    xpcshell data.

    Args:
        filename (str): the requested data file.
        kind (str, optional): the page's ``kind`` parameter.

    Returns:
        str: ``"xpcshell"`` or ``"mochitest"``.

    """
    if filename.startswith("mochitest-"):
        return "mochitest"
    if filename == GENERIC_FILENAME:
        return kind or DEFAULT_HARNESS
    return DEFAULT_HARNESS


def parse_try_filename(filename: str) -> Optional[Tuple[str, str]]:
    """Return ``(harness, revision)`` for ``<harness>-try-<revision>.json``, else ``None``."""
    match = TRY_REVISION_RE.fullmatch(filename)
    if match is None:
        return None
    return match.group(1), match.group(2)


def to_mochitest_filename(filename: str) -> str:
    return filename.replace("xpcshell-", "mochitest-", 1)
