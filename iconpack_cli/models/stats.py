"""
Outcome models for icon pack operations.
"""

from dataclasses import dataclass, field
from enum import Enum


class PipelineState(Enum):
    """States of a download pass."""

    RUNNING = "running"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class ApplyStatus(Enum):
    """User-facing classification of a finished apply."""

    NOTHING_TO_DO = "nothing_to_do"
    CANCELLED = "cancelled"
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


class RestoreResult(Enum):
    OK = "ok"
    NO_BACKUP_FOUND = "no_backup_found"


@dataclass
class ApplyOutcome:
    """Tracks the counters of a single download pass."""

    total: int = 0
    success_count: int = 0
    failed_count: int = 0
    state: PipelineState = PipelineState.RUNNING
    failed_icons: list[str] = field(default_factory=list)
    # Set when the icons were installed but the active pack could not be saved
    settings_error: str | None = None

    def record_success(self) -> None:
        self.success_count += 1

    def record_failure(self, icon_name: str) -> None:
        self.failed_count += 1
        self.failed_icons.append(icon_name)

    @property
    def cancelled(self) -> bool:
        return self.state is PipelineState.CANCELLED

    @property
    def all_succeeded(self) -> bool:
        return self.state is PipelineState.COMPLETED and self.failed_count == 0

    @property
    def status(self) -> ApplyStatus:
        """Collapses the counters into one of the distinct outcome states."""
        if self.total == 0:
            return ApplyStatus.NOTHING_TO_DO
        if self.cancelled:
            return ApplyStatus.CANCELLED
        if self.success_count == 0:
            return ApplyStatus.FAILED
        if self.failed_count == 0:
            return ApplyStatus.SUCCESS
        return ApplyStatus.PARTIAL
