"""
Shared fixtures for the WebP MCP tests.
"""
import base64
import io

import pytest
from PIL import Image

from webp_backend import Config, create_app


def make_png(size=(4, 3), mode="RGBA", color=(255, 0, 0, 128)) -> bytes:
    """Build a small in-memory PNG."""
    buf = io.BytesIO()
    Image.new(mode, size, color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def png_bytes():
    """Fixture providing a 4x3 RGBA PNG."""
    return make_png()


@pytest.fixture
def png_data_url(png_bytes):
    """Fixture providing the PNG as a data URL."""
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")


@pytest.fixture
def config():
    """Fixture providing a small test configuration."""
    return Config(workers=2, max_upload_bytes=64 * 1024)


@pytest.fixture
def app(config):
    """Fixture providing a configured Flask app."""
    app = create_app(config)
    app.config["TESTING"] = True
    yield app
    app.config["mcp_service"].shutdown()


@pytest.fixture
def client(app):
    """Fixture providing a Flask test client."""
    return app.test_client()
