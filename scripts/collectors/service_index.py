"""Endpoint lookup in a NuGet v3 service index."""

from typing import Any, Optional


def normalize_types(value: Any) -> list[str]:
    """Return the ``@type`` field of a resource as a list of strings."""
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    return []


def resolve_endpoint(service_index: Any, type_prefix: str) -> Optional[str]:
    """Find the endpoint URL for the first resource matching ``type_prefix``.

    Resources are scanned in declared order. A resource matches when any of
    its ``@type`` tags starts with the prefix, compared case-insensitively,
    so ``"SearchQueryService"`` matches ``"SearchQueryService/3.5.0"``.

    Args:
        service_index: Parsed service index document.
        type_prefix: Capability type prefix to look for.

    Returns:
        The matching resource's ``@id``, or None if nothing matches.
    """
    resources = service_index.get("resources") if isinstance(service_index, dict) else None
    if not isinstance(resources, list):
        return None

    prefix = type_prefix.lower()
    for resource in resources:
        if not isinstance(resource, dict):
            continue
        types = [t.lower() for t in normalize_types(resource.get("@type"))]
        endpoint = resource.get("@id")
        # a matching resource without a usable URL does not count
        if not isinstance(endpoint, str) or not endpoint:
            continue
        if any(t.startswith(prefix) for t in types):
            return endpoint

    return None
