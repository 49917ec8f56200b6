"""
Configuration loading and validation for the helper collection.

Provides strongly typed settings objects loaded from environment variables
with upfront validation.
"""
