"""Image fetching, resizing and encoding for the imageFit formatter."""

from docformatters.image.fit import (
    PNG_DATA_URI_PREFIX,
    image_fit,
    image_fit_sync,
    resize_to_png,
    to_png_data_uri,
)
from docformatters.image.source import decode_data_uri, fetch_image, is_data_uri

__all__ = [
    "PNG_DATA_URI_PREFIX",
    "image_fit",
    "image_fit_sync",
    "resize_to_png",
    "to_png_data_uri",
    "decode_data_uri",
    "fetch_image",
    "is_data_uri",
]
