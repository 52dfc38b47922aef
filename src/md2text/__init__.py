"""Markdown to plain text converter - strips Markdown syntax while keeping the reading flow."""

from importlib.metadata import PackageNotFoundError, version

from .transformers import convert

try:
    __version__ = version("md2text")
except PackageNotFoundError:
    __version__ = "0.0.0"  # Fallback for development

__all__ = ["__version__", "convert"]
