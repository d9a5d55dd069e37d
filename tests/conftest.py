"""Shared fixtures for formatter tests."""

import base64
from io import BytesIO

import pytest
import requests
from PIL import Image


def make_image_bytes(size=(64, 32), color=(200, 40, 40), mode="RGB", fmt="PNG") -> bytes:
    """Render a solid-colour image and return the encoded bytes."""
    img = Image.new(mode, size, color)
    output = BytesIO()
    img.save(output, format=fmt)
    return output.getvalue()


def to_data_uri(data: bytes, subtype: str = "png") -> str:
    return f"data:image/{subtype};base64,{base64.b64encode(data).decode('ascii')}"


def decode_png_data_uri(value: str) -> Image.Image:
    """Open the image inside a data:image/png;base64 URI."""
    prefix = "data:image/png;base64,"
    assert value.startswith(prefix)
    img = Image.open(BytesIO(base64.b64decode(value[len(prefix):])))
    img.load()
    return img


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, content=b"", reason="OK"):
        self.status_code = status_code
        self.content = content
        self.reason = reason

    @property
    def ok(self):
        return self.status_code < 400


@pytest.fixture
def png_data_uri():
    return to_data_uri(make_image_bytes())


@pytest.fixture
def fake_get(monkeypatch):
    """Patch requests.get and record the calls made.

    Set ``fake_get.response`` (or ``fake_get.error``) before the call.
    """
    class Recorder:
        response = FakeResponse()
        error = None
        calls = []

    recorder = Recorder()
    recorder.calls = []

    def get(url, **kwargs):
        recorder.calls.append((url, kwargs))
        if recorder.error is not None:
            raise recorder.error
        return recorder.response

    monkeypatch.setattr(requests, "get", get)
    return recorder
