import logging
from dataclasses import dataclass
from typing import Optional

from flask import Flask, jsonify

from .catalog import CatalogLister
from .settings import Settings
from .streaming import StreamDispatcher

__version__ = "0.1.0"


@dataclass(frozen=True)
class Components:
    settings: Settings
    catalog: CatalogLister
    dispatcher: StreamDispatcher


def create_app(settings: Optional[Settings] = None):
    """Create and configure the Flask application.

    ``settings`` defaults to :meth:`Settings.from_env`.  The media root is
    created if it does not exist yet, and the catalog and stream components
    are built once from the settings and shared, read-only, by every request
    through ``app.extensions["vidstream"]``.
    """
    settings = settings or Settings.from_env()
    logging.getLogger("vidstream").setLevel(settings.log_level)

    app = Flask(__name__)
    app.config.update(
        MEDIA_ROOT=str(settings.media_root),
        CORS_ORIGIN=settings.cors_origin,
        DEBUG=settings.debug,
    )
    settings.media_root.mkdir(parents=True, exist_ok=True)

    app.extensions["vidstream"] = Components(
        settings=settings,
        catalog=CatalogLister(settings.media_root, settings.extensions),
        dispatcher=StreamDispatcher(
            settings.media_root,
            settings.extensions,
            chunk_size=settings.chunk_size,
            timeout=settings.stream_timeout,
        ),
    )

    @app.get("/healthz")
    def healthz():
        return jsonify({"status": "ok", "media_root": settings.media_root.is_dir()})

    @app.after_request
    def cors(resp):
        origin = app.config["CORS_ORIGIN"]
        if origin:
            resp.headers["Access-Control-Allow-Origin"] = origin
            resp.headers["Access-Control-Expose-Headers"] = "Content-Range, Accept-Ranges, Content-Length"
        return resp

    from .routes.catalog import bp as catalog_bp
    from .routes.errors import bp as errors_bp
    from .routes.stream import bp as stream_bp
    app.register_blueprint(catalog_bp)
    app.register_blueprint(stream_bp)
    app.register_blueprint(errors_bp)

    return app


__all__ = ["create_app", "Settings"]
