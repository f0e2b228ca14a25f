"""Package snapshot collectors for NuGet."""

from collectors.base import BaseCollector
from collectors.nuget import NuGetClient, NuGetError, SearchError, ServiceIndexError
from collectors.nuget_exact import NuGetExactCollector
from collectors.nuget_search import NuGetSearchCollector

__all__ = [
    "BaseCollector",
    "NuGetClient",
    "NuGetError",
    "SearchError",
    "ServiceIndexError",
    "NuGetExactCollector",
    "NuGetSearchCollector",
]
