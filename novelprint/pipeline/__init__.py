"""novelprint pipeline package.

This package contains orchestration, stage telemetry, and artifact payload
helpers for pagination runs.
"""

from .orchestrator import PrintPipeline

__all__ = ["PrintPipeline"]
