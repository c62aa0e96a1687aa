"""Key and prefix helpers for the flat, ``/``-delimited object namespace."""

from dataclasses import dataclass

DELIMITER = "/"

PREVIEWABLE_IMAGE_EXTENSIONS = frozenset(
    {"jpg", "jpeg", "png", "gif", "webp", "bmp", "tif", "tiff", "avif", "svg"}
)

_BYTE_UNIT = 1024
_BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


@dataclass(frozen=True)
class Breadcrumb:
    """One navigable segment of a prefix."""

    label: str
    prefix: str


def normalize_prefix(prefix: str | None) -> str:
    """Trim a prefix and make sure a non-empty one ends with the delimiter.

    An empty or blank prefix means the bucket root and normalizes to ``""``.
    """
    if not prefix or not prefix.strip():
        return ""

    normalized = prefix.strip()
    if not normalized.endswith(DELIMITER):
        normalized += DELIMITER
    return normalized


def is_directory_marker(key: str) -> bool:
    """Return True for placeholder keys such as ``docs/``."""
    return key.endswith(DELIMITER)


def folder_name(prefix: str) -> str:
    """Return the last segment of a folder prefix.

    >>> folder_name("docs/reports/")
    'reports'
    """
    trimmed = prefix[:-1] if prefix.endswith(DELIMITER) else prefix
    return trimmed.rsplit(DELIMITER, 1)[-1]


def file_name(key: str) -> str:
    """Return the last segment of an object key.

    >>> file_name("docs/readme.txt")
    'readme.txt'
    """
    return key.rsplit(DELIMITER, 1)[-1]


def is_previewable(key: str | None) -> bool:
    """Return True when the key has an image extension that can be shown inline."""
    if not key or not key.strip():
        return False

    lowercase_key = key.lower()
    dot_index = lowercase_key.rfind(".")
    if dot_index < 0 or dot_index == len(lowercase_key) - 1:
        return False
    return lowercase_key[dot_index + 1 :] in PREVIEWABLE_IMAGE_EXTENSIONS


def sanitize_entry_name(key: str, prefix_to_trim: str = "") -> str:
    """Build a safe archive entry name for ``key``.

    The exported prefix is stripped first, then every ``..`` sequence, then
    any leading delimiters, so entries cannot escape the extraction directory.
    """
    sanitized = key
    if prefix_to_trim and prefix_to_trim.strip() and sanitized.startswith(prefix_to_trim):
        sanitized = sanitized[len(prefix_to_trim) :]
    return sanitized.replace("..", "").lstrip(DELIMITER)


def breadcrumbs(prefix: str) -> list[Breadcrumb]:
    """Split a prefix into cumulative breadcrumbs, one per non-empty segment."""
    crumbs: list[Breadcrumb] = []
    cumulative = ""
    for segment in prefix.split(DELIMITER):
        if not segment.strip():
            continue
        cumulative += segment + DELIMITER
        crumbs.append(Breadcrumb(label=segment, prefix=cumulative))
    return crumbs


def parent_prefix(prefix: str) -> str:
    """Return the prefix of the enclosing folder, ``""`` at the top level."""
    if not prefix or not prefix.strip():
        return ""

    trimmed = prefix[:-1] if prefix.endswith(DELIMITER) else prefix
    separator_index = trimmed.rfind(DELIMITER)
    if separator_index < 0:
        return ""
    return trimmed[: separator_index + 1]


def format_bytes(size: int) -> str:
    """Human readable byte count using 1024-based units."""
    if size < _BYTE_UNIT:
        return f"{size} B"

    value = float(size)
    unit_index = 0
    while value >= _BYTE_UNIT and unit_index < len(_BYTE_UNITS) - 1:
        value /= _BYTE_UNIT
        unit_index += 1
    return f"{value:.2f} {_BYTE_UNITS[unit_index]}"
