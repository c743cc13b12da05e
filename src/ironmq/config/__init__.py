"""
Package: config
Description: Environment-backed client settings.
"""
