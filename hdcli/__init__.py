"""Configuration, argument grammar, request building and terminal rendering for HeadsDown availability."""

__version__ = "0.1.0"