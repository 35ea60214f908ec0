import logging
import os
import time
from pathlib import Path
from typing import BinaryIO, Iterable, Optional

from flask import Response

from .errors import NotFound, StreamIOError
from .models.media import ResolvedRange
from .util_fs import clean_name, content_type_for, has_allowed_extension, resolve_inside

logger = logging.getLogger(__name__)


class FileSlice:
    """Iterate over ``length`` bytes of ``fh`` starting at ``offset``.

    Follows the WSGI iterable protocol: the server pulls one chunk at a time
    and calls :meth:`close` when it is done or the client goes away, which
    releases the file handle.  A short read or an expired deadline raises
    :class:`StreamIOError` so the server aborts the connection.
    """

    def __init__(self, fh: BinaryIO, offset: int, length: int, chunk_size: int,
                 timeout: Optional[float] = None, name: str = ""):
        self.fh = fh
        self.offset = offset
        self.remaining = length
        self.chunk_size = chunk_size
        self.name = name
        self.deadline = time.monotonic() + timeout if timeout else None
        self._positioned = False

    @property
    def closed(self) -> bool:
        return self.fh.closed

    def __iter__(self):
        return self

    def __next__(self) -> bytes:
        if self.remaining <= 0 or self.fh.closed:
            self.close()
            raise StopIteration
        if self.deadline is not None and time.monotonic() > self.deadline:
            self.close()
            logger.warning("Transfer of %s exceeded its deadline, aborting", self.name)
            raise StreamIOError("Transfer timed out")
        try:
            if not self._positioned:
                self.fh.seek(self.offset)
                self._positioned = True
            chunk = self.fh.read(min(self.chunk_size, self.remaining))
        except OSError as e:
            self.close()
            logger.error("Read error while streaming %s: %s", self.name, e)
            raise StreamIOError() from e
        if not chunk:
            self.close()
            logger.error("%s ended %d bytes early", self.name, self.remaining)
            raise StreamIOError("File ended before the announced length")
        self.remaining -= len(chunk)
        return chunk

    def close(self):
        if not self.fh.closed:
            self.fh.close()


class StreamDispatcher:
    def __init__(self, media_root: Path, extensions: Iterable[str],
                 chunk_size: int = 64 * 1024, timeout: Optional[float] = None):
        self.media_root = Path(media_root)
        self.extensions = frozenset(ext.lower() for ext in extensions)
        self.chunk_size = chunk_size
        self.timeout = timeout

    def locate(self, raw_name: str) -> Path:
        """Map a client-supplied name to a servable file under the media root.

        Traversal attempts, disallowed extensions and missing files all raise
        the same :class:`NotFound`.
        """
        name = clean_name(raw_name)
        path = resolve_inside(self.media_root, name)
        if path is None:
            logger.warning("Rejected unsafe video name %r", raw_name)
            raise NotFound()
        allowed = (has_allowed_extension(name, self.extensions)
                   and has_allowed_extension(path.name, self.extensions))
        if not allowed or not path.is_file():
            logger.info("Video not found: %s", path)
            raise NotFound()
        return path

    def serve(self, path: Path, rng: Optional[ResolvedRange] = None) -> Response:
        fh = path.open("rb")
        try:
            total = rng.total if rng is not None else _size(fh)
            headers = {"Accept-Ranges": "bytes"}
            if rng is None:
                status, offset, length = 200, 0, total
            else:
                status, offset, length = 206, rng.start, rng.length
                headers["Content-Range"] = rng.content_range
            headers["Content-Length"] = str(length)
            body = FileSlice(fh, offset, length, self.chunk_size, self.timeout, path.name)
        except BaseException:
            fh.close()
            raise

        logger.debug("Serving %s status=%d offset=%d length=%d", path.name, status, offset, length)
        return Response(
            body,
            status=status,
            headers=headers,
            mimetype=content_type_for(path.name),
            direct_passthrough=True,
        )


def _size(fh: BinaryIO) -> int:
    return os.fstat(fh.fileno()).st_size
