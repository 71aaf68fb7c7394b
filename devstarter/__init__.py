"""Dev Starter: scaffold a React client and an Express server side by side."""

__version__ = "0.1.0"
