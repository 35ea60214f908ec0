"""Single byte-range parsing for ``Range: bytes=<start>-<end>`` headers.

Only one range per request is honoured.  Anything that is not a single
``bytes`` range with an explicit start offset is rejected with
:class:`~vidstream.errors.InvalidRange`; a well-formed range that falls outside
the entity raises :class:`~vidstream.errors.RangeNotSatisfiable`.  Both map to
416, so a bad header never silently degrades into a full-body response.
"""

import logging
import re
from typing import Optional

from .errors import InvalidRange, RangeNotSatisfiable
from .models.media import RangeRequest, ResolvedRange

logger = logging.getLogger(__name__)

_RANGE_RE = re.compile(r"^bytes\s*=\s*(\d*)\s*-\s*(\d*)$", re.IGNORECASE)

# Offsets with more significant digits than this lie past any real file.
_MAX_DIGITS = 19
_BEYOND_EOF = 10 ** _MAX_DIGITS


def _offset(digits: str) -> int:
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        return _BEYOND_EOF
    return int(digits)


def parse_range(header: str, total: int = 0) -> RangeRequest:
    """Split ``header`` into its raw start/end offsets without bounds checks.

    ``total`` is only used to annotate the raised error.
    """
    value = (header or "").strip()
    if "," in value:
        raise InvalidRange(total, "Multiple ranges are not supported")
    m = _RANGE_RE.match(value)
    if not m:
        raise InvalidRange(total)
    start_s, end_s = m.groups()
    if not start_s:
        # suffix ranges (bytes=-N) need an explicit start in this service
        raise InvalidRange(total, "Range start offset is required")
    return RangeRequest(_offset(start_s), _offset(end_s) if end_s else None)


def resolve(header: Optional[str], total: int) -> ResolvedRange:
    request = parse_range(header, total)
    start = request.start_raw
    end = total - 1 if request.end_raw is None else min(request.end_raw, total - 1)
    if start >= total or start > end:
        logger.info("Unsatisfiable range %r for %d bytes", header, total)
        raise RangeNotSatisfiable(total)
    return ResolvedRange(start, end, total)
