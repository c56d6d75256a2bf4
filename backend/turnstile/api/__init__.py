"""HTTP API for the turnstile system."""

from .endpoints import router, get_controller

__all__ = ['router', 'get_controller']
