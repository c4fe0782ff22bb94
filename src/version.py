"""Service version that is read by project manager tools."""

__version__ = "0.2.0"
