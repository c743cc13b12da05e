"""
Module: utils
Description: Package initialization for shared helpers.

Current utilities:
- logger: Structured logging configuration and helpers
- http: Endpoint, auth header and request body helpers
"""

__all__ = []
