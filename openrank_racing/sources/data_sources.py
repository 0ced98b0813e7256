"""
Data source configuration for the OpenDigger OpenRank feed.

Describes where monthly project_openrank_detail snapshots live.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from openrank_racing.utils.periods import normalize_year_month

DEFAULT_BASE_URL = "https://oss.x-lab.info/open_digger/github"
DEFAULT_REPO = "X-lab2017/open-digger"
DEFAULT_PATH_TEMPLATE = "{base_url}/{repo}/project_openrank_detail/{year}-{month}.json"


@dataclass
class OpenRankSource:
    """Configuration for fetching monthly OpenRank detail snapshots."""
    base_url: str = DEFAULT_BASE_URL
    repo_name: str = DEFAULT_REPO
    path_template: str = DEFAULT_PATH_TEMPLATE
    timeout_seconds: float = 30.0

    def url_for(self, year, month) -> str:
        """
        Build the snapshot URL for one month.

        Args:
            year: Four-digit year
            month: Month 1-12

        Returns:
            Fully qualified snapshot URL
        """
        y, m = normalize_year_month(year, month)
        return self.path_template.format(
            base_url=self.base_url.rstrip("/"),
            repo=self.repo_name.strip("/"),
            year=y,
            month=m,
        )

    def for_repo(self, repo_name: str) -> "OpenRankSource":
        """Copy of this source pointed at another repository."""
        return OpenRankSource(
            base_url=self.base_url,
            repo_name=repo_name,
            path_template=self.path_template,
            timeout_seconds=self.timeout_seconds,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "base_url": self.base_url,
            "repo_name": self.repo_name,
            "path_template": self.path_template,
            "timeout_seconds": self.timeout_seconds,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OpenRankSource":
        """Create from dictionary."""
        return cls(
            base_url=data.get("base_url", DEFAULT_BASE_URL),
            repo_name=data.get("repo_name", DEFAULT_REPO),
            path_template=data.get("path_template", DEFAULT_PATH_TEMPLATE),
            timeout_seconds=data.get("timeout_seconds", 30.0),
        )

    @classmethod
    def from_settings(cls, settings=None, repo_name: Optional[str] = None) -> "OpenRankSource":
        """Create from global settings."""
        if settings is None:
            from openrank_racing.config.settings import get_settings
            settings = get_settings()

        return cls(
            base_url=settings.openrank_base_url,
            repo_name=repo_name or settings.openrank_repo,
            timeout_seconds=settings.request_timeout,
        )
