"""Input/output components for novelprint.

This package contains source-file acquisition and artifact storage used by
the pipeline.
"""

from .source_reader import SourceReader
from .storage import ArtifactStore

__all__ = ["SourceReader", "ArtifactStore"]
