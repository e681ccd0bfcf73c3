"""Devfile detection, devfile generation, registry lookups and GitHub repository helpers."""

__version__ = "0.1.0"

__all__ = [
    "detect",
    "devfile",
    "errors",
    "github",
    "ioutils",
    "registry",
    "spi",
    "util",
]