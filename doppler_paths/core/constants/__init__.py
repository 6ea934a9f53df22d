from doppler_paths.core.constants.base import (
    DEAD_ADDRESS,
    WAD,
    ZERO_ADDRESS,
)

__all__ = [
    "DEAD_ADDRESS",
    "WAD",
    "ZERO_ADDRESS",
]
