import logging
import os
from pathlib import Path
from typing import Iterable, List

from .errors import CatalogUnavailable
from .models.media import MediaEntry
from .util_fs import has_allowed_extension, is_plain_name

logger = logging.getLogger(__name__)


class CatalogLister:
    """Lists the playable files directly inside the media root.

    Entries come back in the order the filesystem enumerates them; nothing is
    sorted or cached, so two calls may differ.
    """

    def __init__(self, media_root: Path, extensions: Iterable[str]):
        self.media_root = Path(media_root)
        self.extensions = frozenset(ext.lower() for ext in extensions)

    def list(self) -> List[MediaEntry]:
        try:
            with os.scandir(self.media_root) as it:
                dir_entries = list(it)
        except OSError as e:
            logger.error("Cannot read media root %s: %s", self.media_root, e)
            raise CatalogUnavailable() from e

        entries = []
        for de in dir_entries:
            if not is_plain_name(de.name) or not has_allowed_extension(de.name, self.extensions):
                continue
            try:
                if not de.is_file():
                    continue
                size = de.stat().st_size
            except OSError:
                # removed or unreadable since the directory was listed
                continue
            entries.append(MediaEntry(de.name, size))
        return entries

    def names(self) -> List[str]:
        return [entry.name for entry in self.list()]
