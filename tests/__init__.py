"""
Quote Relay Test Suite
======================

- Unit tests for individual components
- Integration tests for the server request flow
"""
