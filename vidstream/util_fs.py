import mimetypes
import os
from pathlib import Path
from typing import Iterable, Optional

from werkzeug.security import safe_join

# Explicit types for the default extensions; system mime tables disagree on mkv.
CONTENT_TYPES = {
    ".mp4": "video/mp4",
    ".m4v": "video/mp4",
    ".mkv": "video/x-matroska",
    ".avi": "video/x-msvideo",
    ".webm": "video/webm",
    ".mov": "video/quicktime",
}

_SEPARATORS = {"/", "\\", os.sep} | ({os.altsep} if os.altsep else set())


def has_allowed_extension(name: str, extensions: Iterable[str]) -> bool:
    """Case-insensitive suffix check, so ``clip.MP4`` matches ``.mp4``."""
    return Path(name).suffix.lower() in extensions


def content_type_for(name: str) -> str:
    ext = Path(name).suffix.lower()
    if ext in CONTENT_TYPES:
        return CONTENT_TYPES[ext]
    return mimetypes.guess_type(name)[0] or "application/octet-stream"


def clean_name(raw: str) -> str:
    """Strip surrounding quote characters from a requested name."""
    return (raw or "").strip("\"'")


def is_plain_name(name: str) -> bool:
    """True for a single, non-special path component."""
    if not name or name in (".", "..") or "\x00" in name:
        return False
    if any(sep in name for sep in _SEPARATORS):
        return False
    return not os.path.isabs(name)


def resolve_inside(root: Path, name: str) -> Optional[Path]:
    """Return the canonical path of ``name`` under ``root``, or ``None``.

    The joined path is canonicalized (symlinks followed) and must still be a
    strict descendant of the canonical root.
    """
    if not is_plain_name(name):
        return None
    joined = safe_join(str(root), name)
    if joined is None:
        return None
    root_real = Path(root).resolve()
    target = Path(joined).resolve()
    if target == root_real or not target.is_relative_to(root_real):
        return None
    return target
