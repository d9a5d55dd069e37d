"""Tests for the imageFit formatter."""

import asyncio
import base64
from io import BytesIO

import pytest
import requests
from PIL import Image

from conftest import FakeResponse, decode_png_data_uri, make_image_bytes, to_data_uri
from docformatters.exceptions import (
    ImageFetchError,
    ImageProcessingError,
    InvalidArgumentError,
)
from docformatters.image import image_fit, image_fit_sync, resize_to_png
from docformatters.image.source import decode_data_uri

PNG_PREFIX = "data:image/png;base64,"


def fit(*args, **kwargs):
    return asyncio.run(image_fit(*args, **kwargs))


class TestDataUriSource:

    def test_resizes_to_requested_size(self, png_data_uri):
        result = fit(png_data_uri, 50, 50)
        assert result.startswith(PNG_PREFIX)
        assert decode_png_data_uri(result).size == (50, 50)

    def test_defaults_to_200x200(self, png_data_uri):
        result = fit(png_data_uri)
        img = decode_png_data_uri(result)
        assert img.format == "PNG"
        assert img.size == (200, 200)

    def test_numeric_string_dimensions(self, png_data_uri):
        assert decode_png_data_uri(fit(png_data_uri, "40", "30px")).size == (40, 30)

    def test_jpeg_is_reencoded_as_png(self):
        source = to_data_uri(make_image_bytes(fmt="JPEG"), "jpeg")
        img = decode_png_data_uri(fit(source, 20, 10))
        assert img.format == "PNG"
        assert img.size == (20, 10)

    def test_palette_transparency_kept_as_alpha(self):
        img = Image.new("P", (16, 16), 0)
        img.putpalette([255, 0, 0] * 256)
        output = BytesIO()
        img.save(output, format="GIF", transparency=0)
        result = decode_png_data_uri(fit(to_data_uri(output.getvalue(), "gif"), 8, 8))
        assert result.mode == "RGBA"
        assert result.getpixel((4, 4))[3] == 0

    def test_cmyk_converted_to_rgb(self):
        source = to_data_uri(make_image_bytes(mode="CMYK", color=(0, 255, 255, 0), fmt="JPEG"), "jpeg")
        assert decode_png_data_uri(fit(source, 12, 12)).mode == "RGB"

    def test_fill_policy_stretches_without_cropping_or_padding(self):
        # Left half red, right half blue, 2:1 aspect ratio
        img = Image.new("RGB", (64, 32), (255, 0, 0))
        img.paste((0, 0, 255), (32, 0, 64, 32))
        output = BytesIO()
        img.save(output, format="PNG")

        result = decode_png_data_uri(fit(to_data_uri(output.getvalue()), 32, 32))

        assert result.size == (32, 32)
        left = result.getpixel((2, 16))
        right = result.getpixel((29, 16))
        assert left[0] > 200 and left[2] < 50
        assert right[2] > 200 and right[0] < 50
        # Stretched vertically to the full height, not letterboxed
        assert result.getpixel((2, 0))[0] > 200
        assert result.getpixel((29, 31))[2] > 200

    def test_idempotent_for_same_dimensions(self, png_data_uri):
        first = fit(png_data_uri, 50, 50)
        second = fit(first, 50, 50)
        a = decode_png_data_uri(first)
        b = decode_png_data_uri(second)
        assert a.size == b.size
        assert a.mode == b.mode
        assert a.tobytes() == b.tobytes()

    def test_nearest_resample(self, png_data_uri):
        result = decode_png_data_uri(fit(png_data_uri, 5, 5, resample="nearest"))
        assert result.getpixel((0, 0)) == (200, 40, 40)

    def test_invalid_image_bytes(self):
        with pytest.raises(ImageProcessingError, match="imageFit formatter failed"):
            fit(to_data_uri(b"definitely not an image"), 10, 10)

    def test_malformed_data_uri(self):
        with pytest.raises(ImageProcessingError, match="Malformed image data URI") as exc_info:
            fit("data:image/png,abc", 10, 10)
        assert isinstance(exc_info.value.cause, ValueError)

    def test_decode_data_uri_accepts_any_subtype(self):
        data = make_image_bytes()
        assert decode_data_uri(to_data_uri(data, "svg+xml")) == data

    def test_decode_data_uri_without_padding(self):
        assert decode_data_uri("data:image/png;base64,YWI") == b"ab"
        assert decode_data_uri("data:image/png;base64,YQ") == b"a"

    def test_decode_data_uri_url_safe_alphabet(self):
        assert decode_data_uri("data:image/png;base64,-_-_") == b"\xfb\xff\xbf"
        assert decode_data_uri("data:image/png;base64,+/+/") == b"\xfb\xff\xbf"

    def test_decode_data_uri_ignores_whitespace(self):
        assert decode_data_uri("data:image/png;base64,YW\nJj ZA==") == b"abcd"

    def test_unpadded_url_safe_image(self):
        data = make_image_bytes(size=(33, 17), color=(250, 251, 252))
        payload = base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")
        result = fit("data:image/png;base64," + payload, 10, 10)
        assert decode_png_data_uri(result).size == (10, 10)


class TestUrlSource:

    def test_fetches_and_resizes(self, fake_get):
        fake_get.response = FakeResponse(content=make_image_bytes(size=(10, 10)))

        result = fit("https://example.com/sample.png", 30, 40, timeout=5)

        assert decode_png_data_uri(result).size == (30, 40)
        assert len(fake_get.calls) == 1
        url, kwargs = fake_get.calls[0]
        assert url == "https://example.com/sample.png"
        assert kwargs["timeout"] == 5

    def test_http_404(self, fake_get):
        fake_get.response = FakeResponse(status_code=404, reason="Not Found")

        with pytest.raises(ImageProcessingError) as exc_info:
            fit("https://example.com/missing.png", 50, 50)

        error = exc_info.value
        assert "imageFit formatter failed" in str(error)
        assert "Not Found" in str(error)
        assert isinstance(error.cause, ImageFetchError)
        assert error.__cause__ is error.cause
        assert error.cause.status_code == 404

    def test_non_2xx_status_rejected(self, fake_get):
        fake_get.response = FakeResponse(status_code=304, reason="Not Modified")
        with pytest.raises(ImageProcessingError, match="Not Modified") as exc_info:
            fit("https://example.com/cached.png")
        assert exc_info.value.cause.status_code == 304

    def test_missing_reason_falls_back_to_status_code(self, fake_get):
        fake_get.response = FakeResponse(status_code=503, reason="")
        with pytest.raises(ImageProcessingError, match="HTTP 503"):
            fit("https://example.com/busy.png")

    def test_connection_error(self, fake_get):
        fake_get.error = requests.exceptions.ConnectionError("connection refused")
        with pytest.raises(ImageProcessingError, match="connection refused") as exc_info:
            fit("https://example.com/down.png")
        assert isinstance(exc_info.value.cause, ImageFetchError)

    def test_timeout(self, fake_get):
        fake_get.error = requests.exceptions.ReadTimeout("read timed out")
        with pytest.raises(ImageProcessingError, match="timeout after 2 seconds"):
            fit("https://example.com/slow.png", timeout=2)

    def test_non_image_body(self, fake_get):
        fake_get.response = FakeResponse(content=b"<html>nope</html>")
        with pytest.raises(ImageProcessingError):
            fit("https://example.com/page.html")


class TestArguments:

    @pytest.mark.parametrize("width,height", [("abc", 50), (50, None), (0, 50), (50, -1)])
    def test_invalid_dimensions_rejected_before_fetch(self, fake_get, width, height):
        with pytest.raises(InvalidArgumentError):
            fit("https://example.com/sample.png", width, height)
        assert fake_get.calls == []

    def test_non_string_value(self):
        with pytest.raises(InvalidArgumentError, match="expects a URL or data URI"):
            fit(None)

    def test_unknown_resample(self, png_data_uri):
        with pytest.raises(InvalidArgumentError, match="Unknown resample filter"):
            fit(png_data_uri, resample="sinc")


class TestSyncVariant:

    def test_matches_async_result(self, png_data_uri):
        assert image_fit_sync(png_data_uri, 25, 15) == fit(png_data_uri, 25, 15)

    def test_wraps_failures(self, fake_get):
        fake_get.response = FakeResponse(status_code=500, reason="Internal Server Error")
        with pytest.raises(ImageProcessingError, match="Internal Server Error"):
            image_fit_sync("https://example.com/broken.png")


def test_resize_to_png_exact_size():
    png = resize_to_png(make_image_bytes(size=(3, 7)), 11, 13)
    assert png.startswith(b"\x89PNG")
    assert Image.open(BytesIO(png)).size == (11, 13)
