from flask import Blueprint, current_app, jsonify, request

bp = Blueprint("catalog", __name__)

_TRUTHY = {"1", "true", "yes", "on"}


@bp.get("/api/videos")
def videos():
    """List playable files; ``?details=1`` adds sizes."""
    catalog = current_app.extensions["vidstream"].catalog
    if request.args.get("details", "").lower() in _TRUTHY:
        return jsonify([entry.to_dict() for entry in catalog.list()])
    return jsonify(catalog.names())
