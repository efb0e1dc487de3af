"""AI Ad Studio - product image to ad script to video ad."""

__version__ = "1.0.0"
