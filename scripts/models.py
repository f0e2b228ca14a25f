"""Data models for NuGet download snapshots."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def as_count(value: Any) -> int:
    """Coerce an untrusted download count to a non-negative int."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return max(int(value), 0) if value.is_integer() else 0
    if isinstance(value, str):
        # Parse count (may have commas)
        try:
            return max(int(value.strip().replace(",", "")), 0)
        except ValueError:
            return 0
    return 0


def as_text(value: Any) -> str:
    """Coerce an untrusted scalar to a string, mapping null to ''."""
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)


class VersionDownloads(BaseModel):
    """Download count for a single published version."""

    version: str = Field(default="", description="Version string as published")
    downloads: int = Field(default=0, description="Downloads of this version")


class SearchResultEntry(BaseModel):
    """A package entry returned by the search endpoint."""

    id: str = Field(description="Package identifier, casing as returned")
    total_downloads: int = Field(default=0, description="Downloads across all versions")
    version: str = Field(default="", description="Latest version string")
    versions: list[VersionDownloads] = Field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["SearchResultEntry"]:
        """Build an entry from an untrusted search result record.

        Every optional field falls back to its default when absent, null or
        of an unexpected shape.

        Args:
            raw: One element of the search response ``data`` list.

        Returns:
            The parsed entry, or None when the record has no identifier.
        """
        if not isinstance(raw, dict):
            return None

        package_id = as_text(raw.get("id")).strip()
        if not package_id:
            return None

        raw_versions = raw.get("versions")
        if not isinstance(raw_versions, list):
            raw_versions = []

        versions = []
        for item in raw_versions:
            if not isinstance(item, dict):
                continue
            versions.append(
                VersionDownloads(
                    version=as_text(item.get("version")),
                    downloads=as_count(item.get("downloads")),
                )
            )

        return cls(
            id=package_id,
            total_downloads=as_count(raw.get("totalDownloads")),
            version=as_text(raw.get("version")),
            versions=versions,
        )


class PackageSnapshot(BaseModel):
    """Normalized per-package record in a daily snapshot.

    Not-found records carry only ``id``, ``found`` and ``error``; found
    records always carry the download fields and never ``error``.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    found: bool
    total_downloads: Optional[int] = Field(default=None, alias="totalDownloads")
    latest_version: Optional[str] = Field(default=None, alias="latestVersion")
    versions: Optional[list[VersionDownloads]] = None
    error: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: SearchResultEntry) -> "PackageSnapshot":
        return cls(
            id=entry.id,
            found=True,
            total_downloads=entry.total_downloads,
            latest_version=entry.version,
            versions=list(entry.versions),
        )

    @classmethod
    def missing(cls, package_id: str, error: str) -> "PackageSnapshot":
        return cls(id=package_id, found=False, error=error)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DailySnapshot(BaseModel):
    """All package records captured for one UTC calendar date."""

    model_config = ConfigDict(populate_by_name=True)

    date_utc: str = Field(alias="dateUtc", description="UTC date as YYYY-MM-DD")
    packages: list[PackageSnapshot] = Field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "dateUtc": self.date_utc,
            "packages": [pkg.to_json() for pkg in self.packages],
        }
