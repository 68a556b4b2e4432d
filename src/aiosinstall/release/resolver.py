"""
Release resolution.

Queries the GitHub Releases API for the newest tag and builds the download
URL of the matching aios-cli archive. Only the "latest" path segment of the
URL is live; the asset names per variant are fixed.
"""

import logging
from typing import Optional

import requests

from ..config import InstallerConfig
from ..exceptions import ReleaseFetchError
from ..schema import ArtifactVariant, DependencyDecision, PlatformProfile, ReleaseArtifact

logger = logging.getLogger(__name__)


def select_variant(install_succeeded: Optional[bool]) -> ArtifactVariant:
    """CUDA build only when the CUDA dependency is known to be usable."""
    if install_succeeded is True:
        return ArtifactVariant.ACCELERATED
    return ArtifactVariant.STANDARD


def variant_without_install(profile: PlatformProfile) -> ArtifactVariant:
    """Variant a run picks for this host when no CUDA install is attempted."""
    usable = profile.has_compatible_gpu and profile.dependency_already_present
    return select_variant(True if usable else None)


class ReleaseResolver:
    """Resolves the release artifact to download for this host."""

    def __init__(self, config: InstallerConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    def latest_tag(self) -> str:
        """
        Fetch the tag name of the latest published release.

        Raises:
            ReleaseFetchError: The index is unreachable, answered with a
                non-2xx status, returned malformed JSON, or has no tag_name
        """
        url = self.config.release_api_url
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.config.user_agent,
        }
        try:
            response = self.session.get(url, headers=headers, timeout=self.config.request_timeout)
        except requests.RequestException as e:
            raise ReleaseFetchError(str(e), url=url) from e

        if not response.ok:
            raise ReleaseFetchError(f"HTTP {response.status_code}", url=url)

        try:
            payload = response.json()
        except ValueError as e:
            raise ReleaseFetchError("response is not valid JSON", url=url) from e

        tag = payload.get("tag_name") if isinstance(payload, dict) else None
        if not isinstance(tag, str) or not tag.strip():
            raise ReleaseFetchError("response has no tag_name", url=url)
        return tag.strip()

    def artifact_for(self, version_tag: str, decision: DependencyDecision) -> ReleaseArtifact:
        variant = select_variant(decision.install_succeeded)
        url = self.config.artifact_url(variant)
        return ReleaseArtifact(
            version_tag=version_tag,
            variant=variant,
            download_url=url,
            file_name=url.rsplit("/", 1)[-1],
        )

    def resolve_latest(self, decision: DependencyDecision) -> ReleaseArtifact:
        return self.artifact_for(self.latest_tag(), decision)
