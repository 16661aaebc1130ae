import httpx
import json
import urllib.parse
from typing import List, Optional

from pydantic import ValidationError

from yanker.core.constants import REGISTRY_URL, DEFAULT_HTTP_TIMEOUT, get_user_agent
from yanker.core.exceptions import (
    RegistryError,
    RegistryConnectionError,
    RegistryResponseError,
)
from yanker.core.models import CrateVersion, VersionsResponse
from yanker.core.console import ConsoleAware, Console


class Registry(ConsoleAware):
    """Read-only client for the crates.io versions API."""

    """
    Initialize the Registry instance.

    Args:
        base_url (str): The base URL of the registry. Defaults to crates.io.
        timeout (float): Request timeout in seconds.
        console (Optional[Console]): The console instance to use for output. Defaults to None.
        verbose (bool): Whether to enable verbose output. Defaults to False.
        transport (Optional[httpx.AsyncBaseTransport]): Transport override, used by tests.
    """
    def __init__(self,
                 base_url: str = REGISTRY_URL,
                 timeout: float = DEFAULT_HTTP_TIMEOUT,
                 console: Optional[Console] = None,
                 verbose: bool = False,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(console, verbose)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def versions_url(self, crate_name: str) -> str:
        return f"{self.base_url}/api/v1/crates/{urllib.parse.quote(crate_name, safe='')}/versions"

    async def fetch_versions(self, crate_name: str) -> List[CrateVersion]:
        """Fetch every published version of a crate, in registry order.

        Args:
            crate_name: Crate name as found in Cargo.toml

        Returns:
            List of CrateVersion records

        Raises:
            RegistryError: Non-2xx response
            RegistryConnectionError: Transport failure
            RegistryResponseError: Body is not the expected JSON document
        """
        url = self.versions_url(crate_name)
        headers = {"User-Agent": get_user_agent(), "Accept": "application/json"}
        self.log(f"GET {url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, headers=headers, transport=self.transport) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RegistryError(e)
        except httpx.RequestError as e:
            raise RegistryConnectionError(url, str(e) or type(e).__name__)

        self.log(f"  Status Code: {response.status_code}")

        try:
            payload = VersionsResponse.model_validate(response.json())
        except (json.JSONDecodeError, ValueError, ValidationError) as e:
            raise RegistryResponseError(url, str(e))

        self.log(f"  Received {len(payload.versions)} version(s)")
        return payload.versions
