"""NuGet v3 API client: service index lookup and paged search."""

from typing import Optional

import requests

from collectors.service_index import resolve_endpoint


class NuGetError(Exception):
    """Base class for NuGet API failures."""


class ServiceIndexError(NuGetError):
    """The service index could not be fetched or lacks a required resource."""


class SearchError(NuGetError):
    """A search request failed."""

    def __init__(self, query: str, offset: int, status: Optional[int], detail: str = ""):
        self.query = query
        self.offset = offset
        self.status = status
        message = f"Search failed ({query}) at skip={offset}: "
        if status is None:
            message += detail
        else:
            message += f"HTTP {status}" + (f" ({detail})" if detail else "")
        super().__init__(message)


class NuGetClient:
    """Thin wrapper around the NuGet v3 service index and search resource."""

    SERVICE_INDEX_URL = "https://api.nuget.org/v3/index.json"
    SEARCH_TYPE = "SearchQueryService"

    # Fixed request flags sent with every search
    PRERELEASE = "true"
    SEMVER_LEVEL = "2.0.0"

    PAGE_SIZE = 200
    MAX_OFFSET = 2000

    def __init__(
        self,
        session: requests.Session,
        service_index_url: str = SERVICE_INDEX_URL,
        page_size: int = PAGE_SIZE,
        max_offset: int = MAX_OFFSET,
    ):
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")
        self.session = session
        self.service_index_url = service_index_url
        self.page_size = page_size
        self.max_offset = max_offset
        self.hit_ceiling = False
        self.warnings: list[str] = []

    def service_index(self) -> dict:
        """Fetch the service index document."""
        try:
            response = self.session.get(self.service_index_url, timeout=30)
        except requests.RequestException as e:
            raise ServiceIndexError(f"Service index failed: {e}") from e
        if not response.ok:
            raise ServiceIndexError(f"Service index failed: HTTP {response.status_code}")
        return response.json()

    def search_endpoint(self) -> str:
        """Resolve the search endpoint URL from the service index."""
        url = resolve_endpoint(self.service_index(), self.SEARCH_TYPE)
        if not url:
            raise ServiceIndexError(f"{self.SEARCH_TYPE} not found in index.")
        return url

    def search_page(self, endpoint: str, query: str, skip: int, take: int) -> list:
        """Fetch one page of search results.

        Raises:
            SearchError: On a transport error, non-success response or a
                body that is not JSON.
        """
        params = {
            "q": query,
            "skip": skip,
            "take": take,
            "prerelease": self.PRERELEASE,
            "semVerLevel": self.SEMVER_LEVEL,
        }
        try:
            response = self.session.get(endpoint, params=params, timeout=30)
        except requests.RequestException as e:
            raise SearchError(query, skip, None, str(e)) from e
        if not response.ok:
            raise SearchError(query, skip, response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise SearchError(query, skip, response.status_code, "invalid JSON") from e
        page = data.get("data") if isinstance(data, dict) else None
        return page if isinstance(page, list) else []

    def search_all(self, endpoint: str, query: str) -> list:
        """Fetch every page of results for ``query``.

        Paging stops on the first page shorter than the page size. If the
        next offset would pass ``max_offset`` the loop stops early and
        ``hit_ceiling`` is set.

        Args:
            endpoint: Search endpoint URL.
            query: Free-text search term.

        Returns:
            Raw result records, in request order.
        """
        self.hit_ceiling = False
        results: list = []
        skip = 0

        while True:
            page = self.search_page(endpoint, query, skip, self.page_size)
            results.extend(page)

            if len(page) < self.page_size:
                break

            skip += self.page_size
            # Guard against runaway paging
            if skip > self.max_offset:
                self.hit_ceiling = True
                warning = (
                    f"Search for '{query}' stopped at the {self.max_offset} offset ceiling "
                    f"with {len(results)} results; more may exist"
                )
                self.warnings.append(warning)
                print(f"Warning: {warning}")
                break

        return results
