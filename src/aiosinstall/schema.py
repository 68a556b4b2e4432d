#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Installer Schema Definitions

Pydantic BaseModel schemas for the values that flow through one installation
run: the detected platform, the CUDA decision, the resolved release artifact,
the download outcome and the final installation result.

All models are frozen. Each is built once per run and handed forward to the
next stage.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class OSFamily(str, Enum):
    """Windows release families the installer knows about."""
    WINDOWS_10 = "Windows10"
    WINDOWS_11 = "Windows11"
    SERVER_2022 = "Server2022"
    UNSUPPORTED = "Unsupported"


class ArtifactVariant(str, Enum):
    """The two interchangeable builds of aios-cli."""
    STANDARD = "standard"
    ACCELERATED = "cuda"


class PlatformProfile(BaseModel):
    """Host capabilities relevant to choosing an artifact."""
    model_config = ConfigDict(frozen=True)

    os_family: OSFamily = Field(..., description="Classified Windows release")
    has_compatible_gpu: bool = Field(..., description="Whether an NVIDIA display adapter was found")
    dependency_already_present: bool = Field(..., description="Whether the expected CUDA toolkit directory exists")
    gpu_names: List[str] = Field(default_factory=list, description="Display adapter names reported by the host")

    @property
    def supported(self) -> bool:
        return self.os_family != OSFamily.UNSUPPORTED


class DependencyDecision(BaseModel):
    """Outcome of the CUDA gating step."""
    model_config = ConfigDict(frozen=True)

    attempt_install: bool = Field(False, description="Whether the CUDA installer was run")
    install_succeeded: Optional[bool] = Field(None, description="True when CUDA is usable; None when the step was not engaged")


class ReleaseArtifact(BaseModel):
    """A downloadable aios-cli archive."""
    model_config = ConfigDict(frozen=True)

    version_tag: str = Field(..., description="Latest release tag, e.g. 'v0.2.3'")
    variant: ArtifactVariant = Field(..., description="Standard or CUDA build")
    download_url: str = Field(..., description="Direct download URL of the zip archive")
    file_name: str = Field(..., description="Archive file name (last URL path segment)")


class DownloadOutcome(BaseModel):
    """Result of download_with_retry()."""
    model_config = ConfigDict(frozen=True)

    attempts: int = Field(..., ge=1, description="Number of transfer attempts made")
    max_attempts: int = Field(..., ge=1, description="Attempt budget")
    succeeded: bool = Field(..., description="Whether the file was downloaded")
    local_path: Optional[str] = Field(None, description="Path of the downloaded file on success")

    @model_validator(mode="after")
    def _check_invariants(self):
        if self.attempts > self.max_attempts:
            raise ValueError(f"attempts ({self.attempts}) exceeds max_attempts ({self.max_attempts})")
        if self.succeeded and not self.local_path:
            raise ValueError("a successful download must have a local_path")
        return self


class InstallationResult(BaseModel):
    """Result of placing the binary and updating PATH."""
    model_config = ConfigDict(frozen=True)

    installed_path: Optional[str] = Field(None, description="Final location of the binary")
    path_updated: bool = Field(False, description="Whether the user PATH was modified")
    validated: bool = Field(False, description="Whether the command resolves through PATH")
