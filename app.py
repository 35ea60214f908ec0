import logging

from werkzeug.serving import WSGIRequestHandler

from vidstream import create_app
from vidstream.settings import Settings

settings = Settings.from_env()
app = create_app(settings)


class TimeoutRequestHandler(WSGIRequestHandler):
    # socketserver applies this to every accepted connection
    timeout = settings.socket_timeout


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("Serving %s on http://%s:%d", settings.media_root, settings.host, settings.port)
    app.run(
        host=settings.host,
        port=settings.port,
        debug=settings.debug,
        threaded=True,
        request_handler=TimeoutRequestHandler,
    )
