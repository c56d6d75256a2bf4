"""Transit turnstile: fare card validation and passage statistics."""

__version__ = "1.0.0"
