import logging

from flask import Blueprint, jsonify
from werkzeug.exceptions import HTTPException

from ..errors import RangeError, VidstreamError

logger = logging.getLogger(__name__)

bp = Blueprint("errors", __name__)


@bp.app_errorhandler(RangeError)
def range_rejected(e):
    # 416 carries no body, only the entity length
    return "", 416, {"Content-Range": f"bytes */{e.total}"}


@bp.app_errorhandler(VidstreamError)
def vidstream_error(e):
    return jsonify({"error": e.message}), e.status_code


@bp.app_errorhandler(HTTPException)
def http_error(e):
    return jsonify({"error": e.description}), e.code


@bp.app_errorhandler(Exception)
def server_error(e):
    logger.exception("Unhandled error: %s", e)
    return jsonify({"error": "Internal server error"}), 500
