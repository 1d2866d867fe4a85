"""
Server package exposing FastAPI app and session registry.
"""

from .app import app  # noqa: F401
from .registry import SessionRegistry  # noqa: F401
