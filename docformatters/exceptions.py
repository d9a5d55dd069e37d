"""Custom exceptions for formatter operations."""

from typing import Optional


class FormatterError(Exception):
    """Base exception for formatter errors."""
    pass


class InvalidArgumentError(FormatterError):
    """Raised when a formatter receives an argument it cannot work with."""
    pass


class UnknownFormatterError(FormatterError):
    """Raised when a formatter name is not registered."""
    pass


class ConfigError(FormatterError):
    """Exception raised for configuration errors."""
    pass


class ImageFetchError(FormatterError):
    """Exception raised when an image URL cannot be downloaded.
    
    Attributes:
        message: Error message
        status_code: HTTP status code (if a response was received)
        url: URL that was requested
    """
    
    def __init__(self, message: str, status_code: int = None, url: str = None):
        """Initialize image fetch error.
        
        Args:
            message: Error message
            status_code: HTTP status code
            url: Requested URL
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url


class ImageProcessingError(FormatterError):
    """Raised when fetching, decoding, resizing or encoding an image fails.
    
    The original exception is kept both as ``__cause__`` and as the
    ``cause`` attribute.
    
    Attributes:
        cause: Underlying exception (if any)
    """
    
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        """Initialize image processing error.
        
        Args:
            message: Error message
            cause: Underlying exception
        """
        super().__init__(message)
        self.cause = cause
