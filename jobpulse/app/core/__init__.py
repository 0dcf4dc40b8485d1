"""
Core pipeline package.

This package contains the weekly trends transformation pipeline.
"""

from .config import PipelineConfig
from .trend_runner import run_from_checkpoint, run_trends

__all__ = ["PipelineConfig", "run_from_checkpoint", "run_trends"]
