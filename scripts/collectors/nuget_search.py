"""NuGet package family collector using bulk search discovery."""

from typing import Iterable, Optional

import requests

from collectors.base import BaseCollector
from collectors.nuget import NuGetClient
from models import PackageSnapshot
from tracking import build_tracked_ids, index_by_id, normalize, parse_entries


class NuGetSearchCollector(BaseCollector):
    """Discover a package family by search query and snapshot its downloads.

    A single paged search both discovers the family members and supplies
    their download counts, so no per-package requests are made.
    """

    source_name = "nuget-search"

    def __init__(
        self,
        query: str = "cerbi",
        prefix: str = "cerbi",
        overrides: Iterable[str] = (),
        blocklist: Iterable[str] = (),
        session: Optional[requests.Session] = None,
        service_index_url: str = NuGetClient.SERVICE_INDEX_URL,
        page_size: int = NuGetClient.PAGE_SIZE,
        max_offset: int = NuGetClient.MAX_OFFSET,
    ):
        super().__init__(session)
        self.query = query
        self.prefix = prefix
        self.overrides = list(overrides)
        self.blocklist = list(blocklist)
        self.client = NuGetClient(
            self.session,
            service_index_url=service_index_url,
            page_size=page_size,
            max_offset=max_offset,
        )
        self.discovered_count = 0

    def collect(self) -> list[PackageSnapshot]:
        """Search for the family and normalize every tracked package.

        Raises:
            ServiceIndexError: If the search endpoint cannot be resolved.
            SearchError: If any search page fails.
        """
        print(f"Fetching NuGet service index from {self.client.service_index_url}...")
        endpoint = self.client.search_endpoint()

        print(f"Searching {endpoint} for '{self.query}'...")
        raw_results = self.client.search_all(endpoint, self.query)
        self.warnings.extend(self.client.warnings)

        entries = parse_entries(raw_results)
        prefix_key = self.prefix.lower()
        self.discovered_count = sum(1 for e in entries if e.id.lower().startswith(prefix_key))

        tracked_ids = build_tracked_ids(
            [e.id for e in entries],
            overrides=self.overrides,
            blocklist=self.blocklist,
            prefix=self.prefix,
        )

        return normalize(tracked_ids, index_by_id(entries))
