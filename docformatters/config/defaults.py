"""Default configuration values for docformatters."""

# Default configuration dictionary
DEFAULT_CONFIG = {
    # imageFit Configuration
    "image": {
        "default_width": 200,
        "default_height": 200,
        "resample": "lanczos",  # nearest, bilinear, bicubic or lanczos
    },
    
    # Image Download Configuration
    "fetch": {
        "timeout": 30,  # seconds, null waits forever
    },
    
    # Logging Configuration
    "logging": {
        "level": "INFO",
        "file": "",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    },
}