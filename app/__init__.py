"""BGPKIT Data API: read-only query service over the BGPKIT PostgREST store."""

from importlib import import_module
from typing import Any

__version__ = "0.1.0"


def create_app(*args: Any, **kwargs: Any):
    """Build the FastAPI application without importing it at package import time."""
    module = import_module("app.main")
    return module.create_app(*args, **kwargs)


__all__ = ["__version__", "create_app"]
