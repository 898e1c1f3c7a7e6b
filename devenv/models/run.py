"""
Run and step result models.
"""

from enum import Enum
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field


class StepStatus(str, Enum):
    """Status of an orchestrated step."""
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"


class StepResult(BaseModel):
    """Result of one orchestrated step."""
    name: str = Field(..., description="Step name")
    status: StepStatus = Field(..., description="Step status")
    message: Optional[str] = Field(None, description="Outcome or planned actions")
    duration_seconds: Optional[float] = Field(None, description="Step duration")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Dependency Installer",
                "status": "completed",
                "message": "All dependencies are already installed.",
                "duration_seconds": 1.2
            }
        }


class RunSummary(BaseModel):
    """Complete result of an installer run."""
    dry_run: bool = Field(default=False, description="Whether side effects were suppressed")
    steps: List[StepResult] = Field(default_factory=list)
    network_url: Optional[str] = Field(None, description="Endpoint that passed the network probe")
    log_path: Optional[str] = Field(None, description="Path of the run log")
    success: bool = Field(default=False, description="Overall success status")

    # Timing
    started_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None

    def complete(self, success: bool) -> None:
        """Mark the run as complete."""
        self.success = success
        self.completed_at = datetime.utcnow()
        if self.started_at:
            self.duration_seconds = (self.completed_at - self.started_at).total_seconds()

    @property
    def step_names(self) -> List[str]:
        return [s.name for s in self.steps]
