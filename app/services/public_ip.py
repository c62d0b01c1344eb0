import logging

import httpx

logger = logging.getLogger(__name__)


class PublicIpLookupError(Exception):
    """The IP echo service could not be reached or answered with garbage"""


async def fetch_public_ip(http_client: httpx.AsyncClient, url: str, timeout: float) -> str:
    """Ask the echo service which address our outbound traffic comes from"""
    try:
        response = await http_client.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        raise PublicIpLookupError(str(e) or e.__class__.__name__) from e

    ip = data.get("ip") if isinstance(data, dict) else None
    if not ip:
        raise PublicIpLookupError(f"No ip in response: {data!r}")
    return ip
