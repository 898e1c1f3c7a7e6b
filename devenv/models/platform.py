"""
Platform data models.
"""

from enum import Enum
from typing import List
from pydantic import BaseModel, Field


class Platform(str, Enum):
    """Host platforms the installer knows how to provision."""
    LINUX = "linux"
    MACOS = "macos"


class PlatformProfile(BaseModel):
    """Package-manager commands and extra dependencies for a platform."""
    platform: Platform = Field(..., description="Detected platform")
    install_command: List[str] = Field(..., description="Argv prefix that installs a package")
    query_command: List[str] = Field(..., description="Argv prefix that queries an installed package")
    extra_dependencies: List[str] = Field(
        default_factory=list,
        description="Dependencies prepended to the configured list on this platform"
    )

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "platform": "linux",
                "install_command": ["sudo", "apt-get", "install", "-y"],
                "query_command": ["dpkg", "-s"],
                "extra_dependencies": []
            }
        }

    @property
    def is_macos(self) -> bool:
        return self.platform == Platform.MACOS
