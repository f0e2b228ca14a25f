"""Tracked package selection and snapshot normalization."""

from typing import Iterable, Optional

from models import PackageSnapshot, SearchResultEntry

NOT_FOUND_ERROR = "Not found in search results"


def build_tracked_ids(
    discovered_ids: Iterable[str],
    overrides: Iterable[str] = (),
    blocklist: Iterable[str] = (),
    prefix: Optional[str] = None,
) -> list[str]:
    """Build the sorted list of package ids to snapshot.

    Discovered ids are kept only if they start with ``prefix``; overrides
    are always kept. Anything on the blocklist is dropped. Matching and
    de-duplication are case-insensitive, and the first casing seen wins
    (discovered ids before overrides).

    Args:
        discovered_ids: Ids returned by discovery, in discovery order.
        overrides: Ids to include regardless of the prefix.
        blocklist: Ids to exclude.
        prefix: Family naming prefix. None disables the filter.

    Returns:
        De-duplicated ids, sorted ascending.
    """
    blocked = {str(b).lower() for b in blocklist}
    prefix_key = prefix.lower() if prefix is not None else None

    candidates = [
        package_id
        for package_id in discovered_ids
        if prefix_key is None or package_id.lower().startswith(prefix_key)
    ]
    candidates.extend(str(o) for o in overrides)

    # lowercase key -> first-seen display casing
    tracked: dict[str, str] = {}
    for package_id in candidates:
        key = package_id.lower()
        if key in blocked or key in tracked:
            continue
        tracked[key] = package_id

    return sorted(tracked.values())


def index_by_id(entries: Iterable[SearchResultEntry]) -> dict[str, SearchResultEntry]:
    """Index entries by lowercased id; the first entry for an id wins."""
    index: dict[str, SearchResultEntry] = {}
    for entry in entries:
        index.setdefault(entry.id.lower(), entry)
    return index


def normalize(
    tracked_ids: Iterable[str],
    discovered_by_id: dict[str, SearchResultEntry],
) -> list[PackageSnapshot]:
    """Produce one snapshot record per tracked id, in the same order."""
    packages = []
    for package_id in tracked_ids:
        entry = discovered_by_id.get(package_id.lower())
        if entry is None:
            packages.append(PackageSnapshot.missing(package_id, NOT_FOUND_ERROR))
        else:
            packages.append(PackageSnapshot.from_entry(entry))
    return packages


def parse_entries(raw_results: Iterable) -> list[SearchResultEntry]:
    """Parse raw search records, dropping those without an id."""
    entries = []
    for raw in raw_results:
        entry = SearchResultEntry.from_raw(raw)
        if entry is not None:
            entries.append(entry)
    return entries
