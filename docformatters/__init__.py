"""docformatters - custom formatters for document templates.

Provides ``customSum``, which sums the numeric values of an array, and
``imageFit``, which turns an image URL or data URI into a resized PNG
data URI ready to embed in a generated document.
"""

from docformatters._version import __version__, __version_info__
from docformatters.config import ConfigManager
from docformatters.exceptions import (
    FormatterError,
    InvalidArgumentError,
    ImageProcessingError,
    ImageFetchError,
    UnknownFormatterError,
    ConfigError,
)
from docformatters.image import image_fit, image_fit_sync
from docformatters.numeric import custom_sum, parse_dimension, try_parse_number
from docformatters.registry import FORMATTERS, get_formatter, is_async_formatter

__license__ = "MIT"
__all__ = [
    "__version__",
    "__version_info__",
    "ConfigManager",
    "FormatterError",
    "InvalidArgumentError",
    "ImageProcessingError",
    "ImageFetchError",
    "UnknownFormatterError",
    "ConfigError",
    "custom_sum",
    "image_fit",
    "image_fit_sync",
    "parse_dimension",
    "try_parse_number",
    "FORMATTERS",
    "get_formatter",
    "is_async_formatter",
]
