"""The imageFit formatter.

Takes an image URL or Base64 data URI, stretches the image to exactly the
requested width and height (fill policy: aspect ratio is not preserved and
nothing is padded or cropped), and returns it as a PNG data URI.
"""

import asyncio
import base64
import logging
from contextlib import contextmanager
from io import BytesIO
from typing import Any, Iterator, Optional

from PIL import Image

from docformatters.config.defaults import DEFAULT_CONFIG
from docformatters.exceptions import ImageProcessingError, InvalidArgumentError
from docformatters.image.source import decode_data_uri, fetch_image, is_data_uri
from docformatters.numeric import parse_dimension

logger = logging.getLogger(__name__)

PNG_DATA_URI_PREFIX = "data:image/png;base64,"

DEFAULT_WIDTH = DEFAULT_CONFIG["image"]["default_width"]
DEFAULT_HEIGHT = DEFAULT_CONFIG["image"]["default_height"]
DEFAULT_RESAMPLE = DEFAULT_CONFIG["image"]["resample"]
DEFAULT_FETCH_TIMEOUT = DEFAULT_CONFIG["fetch"]["timeout"]

RESAMPLE_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}

# Modes Pillow can write to PNG and resample without loss
_PNG_MODES = ("L", "LA", "RGB", "RGBA")


def resolve_resample(name: str) -> Image.Resampling:
    """Map a resample filter name to the Pillow constant.
    
    Raises:
        InvalidArgumentError: If the name is unknown
    """
    try:
        return RESAMPLE_FILTERS[str(name).lower()]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown resample filter {name!r}, expected one of "
            f"{', '.join(RESAMPLE_FILTERS)}"
        ) from None


def _to_png_mode(img: Image.Image) -> Image.Image:
    """Convert an image to a mode that resizes cleanly and saves as PNG."""
    if img.mode in _PNG_MODES:
        return img
    
    if img.mode == "1":
        target = "L"
    elif img.mode == "P":
        target = "RGBA" if "transparency" in img.info else "RGB"
    elif "A" in img.getbands():
        target = "RGBA"
    else:
        target = "RGB"
    
    logger.debug(f"Converting image from {img.mode} to {target}")
    return img.convert(target)


def resize_to_png(
    data: bytes,
    width: int,
    height: int,
    resample: str = DEFAULT_RESAMPLE
) -> bytes:
    """Decode an image, stretch it to width x height, and encode as PNG.
    
    Args:
        data: Raw image bytes in any format Pillow can read
        width: Target width in pixels
        height: Target height in pixels
        resample: Resample filter name
        
    Returns:
        PNG-encoded image bytes
    """
    with Image.open(BytesIO(data)) as img:
        img.load()
        source_format = img.format
        source_size = img.size
        
        converted = _to_png_mode(img)
        resized = converted.resize((width, height), resolve_resample(resample))
    
    output = BytesIO()
    resized.save(output, format="PNG")
    png = output.getvalue()
    
    logger.debug(
        f"Resized {source_format} image {source_size[0]}x{source_size[1]} "
        f"-> {width}x{height} ({len(png)} bytes PNG)"
    )
    return png


def to_png_data_uri(png: bytes) -> str:
    """Wrap PNG bytes in a ``data:image/png;base64,`` URI."""
    return PNG_DATA_URI_PREFIX + base64.b64encode(png).decode("ascii")


@contextmanager
def _wrap_failures() -> Iterator[None]:
    """Re-raise any processing failure as ImageProcessingError."""
    try:
        yield
    except Exception as e:
        logger.debug(f"imageFit failed: {e}")
        raise ImageProcessingError(
            f"imageFit formatter failed: {e}",
            cause=e
        ) from e


def _check_arguments(value: Any, width: Any, height: Any, resample: str) -> tuple:
    if not isinstance(value, str):
        raise InvalidArgumentError(
            f"imageFit formatter expects a URL or data URI string, "
            f"got {type(value).__name__}"
        )
    resolve_resample(resample)
    return parse_dimension(width, "width"), parse_dimension(height, "height")


async def image_fit(
    value: str,
    width: Any = DEFAULT_WIDTH,
    height: Any = DEFAULT_HEIGHT,
    *,
    timeout: Optional[float] = DEFAULT_FETCH_TIMEOUT,
    resample: str = DEFAULT_RESAMPLE
) -> str:
    """Resize an image from a URL or data URI and return a PNG data URI.
    
    The download and the Pillow work both run in worker threads, so the
    event loop stays free while either is in progress. Cancelling the
    awaiting task abandons the result.
    
    Args:
        value: Image URL or Base64 data URI
        width: Target width in pixels (number or numeric string)
        height: Target height in pixels (number or numeric string)
        timeout: Download timeout in seconds (None waits indefinitely)
        resample: Resample filter name
        
    Returns:
        ``data:image/png;base64,...`` string
        
    Raises:
        InvalidArgumentError: If value is not a string, or width, height or
            resample are invalid
        ImageProcessingError: If fetching, decoding, resizing or encoding
            fails
        
    Examples:
        >>> await image_fit("https://example.com/sample.png", 200, 200)
        'data:image/png;base64,iVBORw0KGgo...'
    """
    target_width, target_height = _check_arguments(value, width, height, resample)
    
    with _wrap_failures():
        if is_data_uri(value):
            data = decode_data_uri(value)
        else:
            data = await asyncio.to_thread(fetch_image, value, timeout)
        
        png = await asyncio.to_thread(
            resize_to_png, data, target_width, target_height, resample
        )
    
    return to_png_data_uri(png)


def image_fit_sync(
    value: str,
    width: Any = DEFAULT_WIDTH,
    height: Any = DEFAULT_HEIGHT,
    *,
    timeout: Optional[float] = DEFAULT_FETCH_TIMEOUT,
    resample: str = DEFAULT_RESAMPLE
) -> str:
    """Blocking variant of :func:`image_fit` for callers without an event loop."""
    target_width, target_height = _check_arguments(value, width, height, resample)
    
    with _wrap_failures():
        if is_data_uri(value):
            data = decode_data_uri(value)
        else:
            data = fetch_image(value, timeout)
        png = resize_to_png(data, target_width, target_height, resample)
    
    return to_png_data_uri(png)
