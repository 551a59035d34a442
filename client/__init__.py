"""
Client module for the quote relay.
"""

from .quote_client import QuoteClient, format_output

__all__ = ['QuoteClient', 'format_output']
