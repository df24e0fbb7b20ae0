"""Loading of the page catalog: logical page name -> world clock page URL."""

import logging
from pathlib import Path

from worldclock.exceptions import CatalogError

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = ("#", "//")


def is_usable_line(line: str) -> bool:
    """Return False for blank lines and lines commented out with '#' or '//'."""
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith(COMMENT_PREFIXES)


def parse_catalog(lines) -> dict[str, str]:
    """
    Build the catalog mapping from ``key=value`` lines.

    Lines are split on the first '='. Entries without a value are ignored,
    keys and values are trimmed, and later duplicates overwrite earlier ones.
    """
    urls: dict[str, str] = {}
    for line in lines:
        if not is_usable_line(line):
            continue
        key, sep, value = line.partition("=")
        if not sep or not value.strip():
            continue
        urls[key.strip()] = value.strip()
    return urls


def load_catalog(path: str | Path) -> dict[str, str]:
    """
    Load the page catalog from a UTF-8 text file.

    Args:
        path: Location of the catalog file

    Returns:
        Mapping of page name to page URL

    Raises:
        CatalogError: If the file cannot be opened or read
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            urls = parse_catalog(f)
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogError(
            f"Could not read page catalog '{path}'. Place the file next to where the program "
            f"runs; it contains the URLs to download the time data from ({e})"
        ) from e

    logger.info(f"Loaded {len(urls)} page URLs from {path}")
    return urls
