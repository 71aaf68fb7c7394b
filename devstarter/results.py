"""Per-side outcomes of a Dev Starter run.

Each side (client, server) ends in exactly one of three states: ``ok``,
``failed`` with the stage and cause attached, or ``skipped`` when an earlier
side failed and the run stopped.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


class SideStatus(str, Enum):
    OK = "ok"
    FAILED = "failed"
    SKIPPED = "skipped"


class StageFailure(BaseModel):
    """Where and why a pipeline stopped."""

    stage: str = Field(..., description="Stage name such as 'install' or 'manifest'")
    cause: str = Field(..., description="Error message of the underlying failure")
    command: str = Field(default="", description="Failing external command, if any")
    returncode: Optional[int] = Field(default=None, description="Exit code, if the command ran")


class SideResult(BaseModel):
    """Outcome of one side's pipeline."""

    side: str
    folder: str
    status: SideStatus = SideStatus.OK
    failure: Optional[StageFailure] = None
    duration_seconds: float = Field(default=0.0, ge=0.0)

    @computed_field  # type: ignore[misc]
    @property
    def ok(self) -> bool:
        return self.status is SideStatus.OK


class RunReport(BaseModel):
    """Aggregated outcome of a whole run, in execution order."""

    results: list[SideResult] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def success(self) -> bool:
        """True when every side completed."""
        return bool(self.results) and all(r.ok for r in self.results)

    @property
    def failure(self) -> Optional[SideResult]:
        """The first failed side, if any."""
        for result in self.results:
            if result.status is SideStatus.FAILED:
                return result
        return None

    def get(self, side: str) -> Optional[SideResult]:
        for result in self.results:
            if result.side == side:
                return result
        return None
