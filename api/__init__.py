"""
API module for the quote relay.
Provides the FastAPI-based HTTP surface.
"""

__all__ = ['app', 'routes', 'models', 'middleware']
