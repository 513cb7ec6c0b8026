"""HTTP adapter for rendering clients."""

from .app import create_app  # noqa: F401
