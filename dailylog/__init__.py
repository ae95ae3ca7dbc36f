"""Daily Log: dated journal notes, typed or dictated."""
__version__ = "1.0.0"
