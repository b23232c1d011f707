"""Top-level package for novelprint.

This package turns one markdown document into an ordered sequence of
print-ready page fragments. The main orchestration entry point is
`PrintPipeline`; the pure text transforms live in `novelprint.text`.
"""

from .pipeline import PrintPipeline

__all__ = ["PrintPipeline", "__version__"]

__version__ = "0.1.0"
