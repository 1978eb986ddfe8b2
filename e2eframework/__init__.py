"""Command-line flags, environment configuration and feature definitions for end-to-end test suites."""

__version__ = "0.1.0"
__all__ = ["config", "features", "flags"]