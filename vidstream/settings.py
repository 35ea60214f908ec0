import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

# Repository root; relative MEDIA_ROOT values are resolved against it.
BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_MEDIA_ROOT = BASE_DIR / "videos"
DEFAULT_EXTENSIONS = (".mp4", ".mkv", ".avi")


def _extensions(raw: str) -> Tuple[str, ...]:
    exts = []
    for part in raw.split(","):
        part = part.strip().lower()
        if not part:
            continue
        if not part.startswith("."):
            part = "." + part
        exts.append(part)
    return tuple(exts) or DEFAULT_EXTENSIONS


def _timeout(raw: str) -> Optional[float]:
    value = float(raw)
    return value if value > 0 else None


@dataclass(frozen=True)
class Settings:
    media_root: Path = DEFAULT_MEDIA_ROOT
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origin: str = "*"
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    chunk_size: int = 64 * 1024
    stream_timeout: Optional[float] = 3600.0
    socket_timeout: Optional[float] = 60.0
    log_level: str = "INFO"
    debug: bool = False

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from environment variables.

        Unset variables keep their defaults.  ``STREAM_TIMEOUT`` and
        ``SOCKET_TIMEOUT`` accept ``0`` to disable the corresponding limit.
        """
        env = os.environ if environ is None else environ

        media_root = Path(env.get("MEDIA_ROOT", DEFAULT_MEDIA_ROOT))
        if not media_root.is_absolute():
            media_root = BASE_DIR / media_root

        return cls(
            media_root=media_root,
            host=env.get("HOST", cls.host),
            port=int(env.get("PORT", cls.port)),
            cors_origin=env.get("CORS_ORIGIN", cls.cors_origin),
            extensions=_extensions(env.get("MEDIA_EXTENSIONS", ",".join(DEFAULT_EXTENSIONS))),
            chunk_size=max(1, int(env.get("CHUNK_SIZE", cls.chunk_size))),
            stream_timeout=_timeout(env.get("STREAM_TIMEOUT", str(cls.stream_timeout))),
            socket_timeout=_timeout(env.get("SOCKET_TIMEOUT", str(cls.socket_timeout))),
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
            debug=env.get("DEBUG", "false").lower() == "true",
        )
