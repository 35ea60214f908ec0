"""Error conditions raised by the catalog, range and streaming layers.

Each error carries the HTTP status it maps to; the handlers registered in
:mod:`vidstream.routes.errors` turn them into responses.
"""


class VidstreamError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class CatalogUnavailable(VidstreamError):
    status_code = 500
    message = "Unable to read the video catalog"


class NotFound(VidstreamError):
    status_code = 404
    message = "Video not found"


class RangeError(VidstreamError):
    """Base for rejected ``Range`` headers.  ``total`` is the entity length."""

    status_code = 416
    message = "Range not satisfiable"

    def __init__(self, total: int, message=None):
        super().__init__(message)
        self.total = total


class InvalidRange(RangeError):
    message = "Malformed or unsupported Range header"


class RangeNotSatisfiable(RangeError):
    pass


class StreamIOError(VidstreamError):
    """Transfer failed after the status line was sent; the connection must drop."""

    message = "Error while streaming the video"
