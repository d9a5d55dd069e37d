"""Lookup table used by template engines to find formatters by name."""

import inspect
from typing import Callable, Dict

from docformatters.exceptions import UnknownFormatterError
from docformatters.image import image_fit
from docformatters.numeric import custom_sum

FORMATTERS: Dict[str, Callable] = {
    "customSum": custom_sum,
    "imageFit": image_fit,
}


def get_formatter(name: str) -> Callable:
    """Return the formatter registered under name.
    
    Raises:
        UnknownFormatterError: If no formatter has that name
    """
    try:
        return FORMATTERS[name]
    except KeyError:
        raise UnknownFormatterError(
            f"Unknown formatter {name!r}. Available: {', '.join(sorted(FORMATTERS))}"
        ) from None


def is_async_formatter(name: str) -> bool:
    """Return True if the formatter's result must be awaited."""
    return inspect.iscoroutinefunction(get_formatter(name))
