"""Image source resolution: Base64 data URIs and HTTP(S) URLs."""

import base64
import binascii
import logging
import re
from typing import Optional

import requests

from docformatters._version import __version__
from docformatters.exceptions import ImageFetchError

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = "data:image"
_DATA_URI_HEADER = re.compile(r"^data:image/[\w.+-]+;base64,")

USER_AGENT = f"docformatters/{__version__}"


def is_data_uri(value: str) -> bool:
    """Return True if value is an inline image rather than a URL."""
    return value.startswith(DATA_URI_PREFIX)


def decode_data_uri(value: str) -> bytes:
    """Decode the payload of a ``data:image/<subtype>;base64,`` URI.
    
    Both the standard and URL-safe alphabets are accepted, with or
    without trailing padding.
    
    Args:
        value: Image data URI
        
    Returns:
        Raw image bytes
        
    Raises:
        ValueError: If the URI header is malformed or the payload is not
            valid Base64
    """
    match = _DATA_URI_HEADER.match(value)
    if not match:
        raise ValueError(
            "Malformed image data URI, expected data:image/<type>;base64,<data>"
        )
    
    # Accept URL-safe characters, whitespace and missing padding
    payload = re.sub(r"\s+", "", value[match.end():]).rstrip("=")
    payload = payload.replace("-", "+").replace("_", "/")
    payload += "=" * (-len(payload) % 4)
    try:
        data = base64.b64decode(payload)
    except binascii.Error as e:
        raise ValueError(f"Invalid Base64 image data: {e}") from e
    
    logger.debug(f"Decoded data URI ({len(data)} bytes)")
    return data


def fetch_image(
    url: str,
    timeout: Optional[float] = None,
    user_agent: str = USER_AGENT
) -> bytes:
    """Download an image and return its body.
    
    Args:
        url: Image URL
        timeout: Request timeout in seconds (None waits indefinitely)
        user_agent: User-Agent header value
        
    Returns:
        Raw response body
        
    Raises:
        ImageFetchError: If the request fails or returns an error status
    """
    logger.debug(f"Fetching image: {url}")
    
    try:
        response = requests.get(
            url,
            headers={"User-Agent": user_agent},
            timeout=timeout
        )
    except requests.exceptions.Timeout as e:
        raise ImageFetchError(
            f"Request timeout after {timeout} seconds: {url}",
            url=url
        ) from e
    except requests.exceptions.RequestException as e:
        raise ImageFetchError(f"Request failed: {e}", url=url) from e
    
    logger.debug(f"  Response: {response.status_code}")
    
    if not 200 <= response.status_code < 300:
        status_text = response.reason or f"HTTP {response.status_code}"
        raise ImageFetchError(
            f"Failed to fetch image: {status_text}",
            status_code=response.status_code,
            url=url
        )
    
    data = response.content
    logger.debug(f"Downloaded {url} ({len(data)} bytes)")
    return data
