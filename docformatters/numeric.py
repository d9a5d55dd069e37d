"""Numeric coercion helpers and the customSum formatter.

Values coming out of a document's data context are frequently strings
("3000", "3.5kg") rather than numbers. The helpers here normalise them on a
best-effort basis: ``try_parse_number`` reads the leading numeric portion of
a value and reports failure as ``None``, which ``custom_sum`` treats as zero
and ``parse_dimension`` treats as an invalid argument.
"""

import logging
import math
import re
from collections.abc import Sequence
from typing import Any, Optional

from docformatters.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

# Sign, then "Infinity" or a decimal literal with an optional exponent
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)
_INT_PREFIX = re.compile(r"[+-]?[0-9]+")


def _number_from_int(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def try_parse_number(value: Any) -> Optional[float]:
    """Parse the leading numeric portion of a value.
    
    Args:
        value: Number, string, list (first element is read), or any object
            with a meaningful ``str()``
        
    Returns:
        Parsed float, or None if no number could be read
        
    Examples:
        >>> try_parse_number("3.5kg")
        3.5
        >>> try_parse_number("abc") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    
    if isinstance(value, int):
        return _number_from_int(value)
    
    if isinstance(value, float):
        return None if math.isnan(value) else value
    
    # A list reads as its comma-joined text, so only the first element counts
    if isinstance(value, (list, tuple)):
        return try_parse_number(value[0]) if value else None
    
    text = value if isinstance(value, str) else str(value)
    match = _FLOAT_PREFIX.match(text.lstrip())
    if not match:
        return None
    
    token = match.group(0)
    if token.lstrip("+-") == "Infinity":
        return -math.inf if token.startswith("-") else math.inf
    return float(token)


def parse_dimension(value: Any, name: str = "dimension") -> int:
    """Coerce a width/height argument to a positive integer.
    
    Numbers are truncated toward zero and strings are read up to the first
    non-digit character, so ``"120px"`` and ``120.7`` both give 120.
    
    Args:
        value: Number or numeric string
        name: Argument name used in error messages
        
    Returns:
        Positive integer dimension
        
    Raises:
        InvalidArgumentError: If the value is not numeric, not finite,
            or not positive
    """
    result = None
    
    if isinstance(value, bool) or value is None:
        result = None
    elif isinstance(value, int):
        result = value
    elif isinstance(value, float):
        if math.isfinite(value):
            result = int(value)
    else:
        match = _INT_PREFIX.match(str(value).lstrip())
        if match:
            result = int(match.group(0))
    
    if result is None:
        raise InvalidArgumentError(
            f"imageFit {name} must be a number, got {value!r}"
        )
    if result <= 0:
        raise InvalidArgumentError(
            f"imageFit {name} must be positive, got {value!r}"
        )
    
    return result


def is_array(value: Any) -> bool:
    """Return True for ordered sequences other than strings and bytes."""
    return isinstance(value, Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def custom_sum(value: Any) -> float:
    """Sum the numeric values of an array.
    
    Elements that cannot be read as numbers contribute nothing.
    
    Args:
        value: Array of numbers or numeric strings
        
    Returns:
        Sum of all numerical values (0 for an empty array)
        
    Raises:
        InvalidArgumentError: If value is not an array
        
    Examples:
        >>> custom_sum([1000, 2000, 3000])
        6000.0
        >>> custom_sum(["10", "abc", 5.5, None])
        15.5
    """
    if not is_array(value):
        raise InvalidArgumentError("customSum formatter expects an array")
    
    numbers = []
    skipped = 0
    for item in value:
        number = try_parse_number(item)
        if number is None:
            skipped += 1
            continue
        numbers.append(number)
    
    if skipped:
        logger.debug(f"customSum ignored {skipped} non-numeric element(s)")
    
    # fsum is exact, so element order never changes the result
    try:
        return math.fsum(numbers)
    except (ValueError, OverflowError):
        # Mixed infinities or overflow; sorted so the result stays order-free
        return sum(sorted(numbers), 0.0)
