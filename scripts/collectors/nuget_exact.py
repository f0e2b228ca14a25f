"""NuGet collector for a static list of package ids."""

from typing import Iterable, Optional

import requests

from collectors.base import BaseCollector
from collectors.nuget import NuGetClient, SearchError
from models import PackageSnapshot
from tracking import build_tracked_ids, index_by_id, normalize, parse_entries


class NuGetExactCollector(BaseCollector):
    """Look up each listed package individually by exact id.

    A failed lookup only affects its own record; the remaining packages
    are still collected.
    """

    source_name = "nuget-exact"

    # packageid: queries match at most a handful of entries
    LOOKUP_PAGE_SIZE = 20

    def __init__(
        self,
        package_ids: Iterable[str],
        overrides: Iterable[str] = (),
        blocklist: Iterable[str] = (),
        session: Optional[requests.Session] = None,
        service_index_url: str = NuGetClient.SERVICE_INDEX_URL,
    ):
        super().__init__(session)
        self.package_ids = list(package_ids)
        self.overrides = list(overrides)
        self.blocklist = list(blocklist)
        self.client = NuGetClient(self.session, service_index_url=service_index_url)

    def collect(self) -> list[PackageSnapshot]:
        """Look up every tracked id in turn.

        Raises:
            ServiceIndexError: If the search endpoint cannot be resolved.
        """
        tracked_ids = build_tracked_ids(
            self.package_ids, overrides=self.overrides, blocklist=self.blocklist
        )

        print(f"Fetching NuGet service index from {self.client.service_index_url}...")
        endpoint = self.client.search_endpoint()

        print(f"Looking up {len(tracked_ids)} packages...")
        packages = []
        for package_id in tracked_ids:
            try:
                packages.append(self.lookup(endpoint, package_id))
            except SearchError as e:
                self.errors.append(f"{package_id}: {e}")
                packages.append(PackageSnapshot.missing(package_id, str(e)))

        return packages

    def lookup(self, endpoint: str, package_id: str) -> PackageSnapshot:
        """Fetch and normalize a single package."""
        raw_results = self.client.search_page(
            endpoint, f"packageid:{package_id}", 0, self.LOOKUP_PAGE_SIZE
        )
        entries = parse_entries(raw_results)
        return normalize([package_id], index_by_id(entries))[0]
