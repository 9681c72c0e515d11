"""NuGet flat-container lookups.

A version is "new" when the registry's package index does not list it. The
comparison is an exact string match: ``1.0`` and ``1.0.0`` are different
versions here, the same way the flat container keys them.
"""

import logging

import httpx
from pydantic import BaseModel
from pydantic import ValidationError

from .exceptions import RegistryError

logger = logging.getLogger(__name__)

USER_AGENT = "nuget-publisher"


class PackageVersionIndex(BaseModel):
    """Body of ``/v3-flatcontainer/{id}/index.json``."""

    versions: list[str]


def flat_container_url(source: str, package_name: str) -> str:
    """Version index URL for a package (package ids are lower-cased by the registry)."""
    return f"{source}/v3-flatcontainer/{package_name.lower()}/index.json"


def push_source_url(source: str) -> str:
    """Service index URL handed to ``dotnet nuget push``."""
    return f"{source}/v3/index.json"


def create_registry_client() -> httpx.AsyncClient:
    """Create the HTTP client used for registry lookups during a run."""
    return httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    )


async def is_new_version(client: httpx.AsyncClient, source: str, package_name: str, version: str) -> bool:
    """
    Check whether ``version`` of ``package_name`` is missing from the registry.

    Args:
        client: HTTP client (injected so runs share one connection pool)
        source: Registry base address, e.g. ``https://api.nuget.org``
        package_name: Package id (any case)
        version: Version string to look for

    Returns:
        True if the package is unknown (404) or the version is not listed

    Raises:
        RegistryError: On transport failure, non-404 error status or unparseable body
    """
    logger.info(f"Package Name: {package_name}")

    url = flat_container_url(source, package_name)
    logger.info(f"Getting versions from {url}")

    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        raise RegistryError(f"Failed to get versions from NuGet: {e}", context={"url": url}) from e

    if response.status_code == 404:
        logger.info("404 response, assuming new package")
        return True

    if not response.is_success:
        raise RegistryError(
            f"Failed to get versions from NuGet: {response.status_code} {response.reason_phrase}",
            context={"url": url, "status": response.status_code},
        )

    try:
        index = PackageVersionIndex.model_validate_json(response.content)
    except ValidationError as e:
        raise RegistryError(f"Failed to parse response from NuGet: {e}", context={"url": url}) from e

    logger.info(f"Versions retrieved: {', '.join(index.versions)}")

    return version not in index.versions
