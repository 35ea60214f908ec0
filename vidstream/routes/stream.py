from flask import Blueprint, current_app, request

from ..ranges import resolve

bp = Blueprint("stream", __name__)


@bp.get("/api/video/<path:filename>")
def stream(filename):
    dispatcher = current_app.extensions["vidstream"].dispatcher
    path = dispatcher.locate(filename)
    range_header = request.headers.get("Range")
    rng = None
    if range_header is not None:
        rng = resolve(range_header, path.stat().st_size)
    return dispatcher.serve(path, rng)
