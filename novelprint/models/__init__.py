"""Shared typed data models for novelprint.

This package contains dataclasses used across pipeline modules to avoid
cross-module coupling and circular imports.
"""

from .datatypes import Page, PrintManifest, SourceDocument

__all__ = ["Page", "PrintManifest", "SourceDocument"]
