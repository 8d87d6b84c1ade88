"""Structured logging with typed attributes and JSON, text and ANSI sinks."""

__version__ = "0.1.0"