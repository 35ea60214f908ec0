import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from vidstream import create_app
from vidstream.settings import Settings


def random_bytes(n, seed=0):
    return np.random.default_rng(seed).integers(0, 256, size=n, dtype=np.uint8).tobytes()


@pytest.fixture
def media_root(tmp_path):
    root = tmp_path / 'videos'
    root.mkdir()
    return root


@pytest.fixture
def settings(media_root):
    return Settings(media_root=media_root, chunk_size=64, stream_timeout=None)


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def sample_video(media_root):
    """A 1000-byte pseudo-random ``clip.mp4``; returns ``(name, payload)``."""
    payload = random_bytes(1000, seed=42)
    (media_root / 'clip.mp4').write_bytes(payload)
    return 'clip.mp4', payload
