"""
Data Models Layer.

This package contains the Pydantic models and dataclasses that define the core
data structures used throughout the application, such as configuration, pack
descriptors and operation outcomes.
"""

from .config import AppConfig
from .pack import DownloadTask, IconMapping, PackDescriptor
from .stats import ApplyOutcome, ApplyStatus, PipelineState, RestoreResult

__all__ = [
    "AppConfig",
    "ApplyOutcome",
    "ApplyStatus",
    "DownloadTask",
    "IconMapping",
    "PackDescriptor",
    "PipelineState",
    "RestoreResult",
]
