"""
Dependency-related data models.
"""

from enum import Enum
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field

from .platform import Platform


class DependencyStatus(str, Enum):
    """Status of a dependency during a run."""
    PENDING = "pending"
    INSTALLED = "installed"
    MISSING = "missing"
    INSTALLING = "installing"
    COMPLETED = "completed"
    PLANNED = "planned"
    FAILED = "failed"


class InstallMethod(str, Enum):
    """How a missing dependency gets installed."""
    CUSTOM = "custom"
    PACKAGE_MANAGER = "package_manager"


class Dependency(BaseModel):
    """A named tool, framework or font required on the host."""
    name: str = Field(..., description="Dependency name")
    status: DependencyStatus = Field(default=DependencyStatus.PENDING, description="Current status")
    method: Optional[InstallMethod] = Field(None, description="Install method chosen for a missing dependency")
    error_message: Optional[str] = Field(None, description="Error message if failed")
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def update_status(self, status: DependencyStatus, error: Optional[str] = None) -> None:
        """Update dependency status and timestamp."""
        self.status = status
        self.updated_at = datetime.utcnow()
        if error:
            self.error_message = error


ALL_INSTALLED_MESSAGE = "All dependencies are already installed."
MISSING_INSTALLED_MESSAGE = "All missing dependencies have been installed."


class ResolutionSummary(BaseModel):
    """Outcome of one presence-check-then-install pass."""
    platform: Platform = Field(..., description="Platform the pass ran on")
    dry_run: bool = Field(default=False, description="Whether installs were only planned")
    dependencies: List[Dependency] = Field(default_factory=list, description="Dependencies in processing order")
    message: str = Field(default="", description="Final status line")

    class Config:
        json_schema_extra = {
            "example": {
                "platform": "linux",
                "dry_run": False,
                "dependencies": [{"name": "git", "status": "installed"}],
                "message": ALL_INSTALLED_MESSAGE
            }
        }

    def _names(self, *statuses: DependencyStatus) -> List[str]:
        return [d.name for d in self.dependencies if d.status in statuses]

    @property
    def already_installed(self) -> List[str]:
        return self._names(DependencyStatus.INSTALLED)

    @property
    def missing(self) -> List[str]:
        return self._names(
            DependencyStatus.MISSING,
            DependencyStatus.INSTALLING,
            DependencyStatus.COMPLETED,
            DependencyStatus.PLANNED,
            DependencyStatus.FAILED,
        )

    @property
    def installed(self) -> List[str]:
        return self._names(DependencyStatus.COMPLETED)

    @property
    def planned(self) -> List[str]:
        return self._names(DependencyStatus.PLANNED)
