import logging

import httpx

from ..core.config import config

logger = logging.getLogger(__name__)


def get_http_client(
    username: str,
    password: str,
    timeout: float = None,
    verify: bool = None,
) -> httpx.Client:
    """
    Returns a configured httpx.Client with:
    - HTTP Basic authentication for Prism.
    - A single fixed timeout for connect, read, write and pool.
    - JSON content negotiation and the standard User-Agent header.

    No retries are configured; a failed request fails the run.
    """
    t = timeout if timeout is not None else config.REQUEST_TIMEOUT
    v = verify if verify is not None else config.PRISM_VERIFY_CERTS

    headers = {
        "User-Agent": config.USER_AGENT,
        "Accept": "application/json",
        "Content-Type": "application/json",
    }

    if not v:
        logger.debug("Creating HTTP client without TLS certificate verification")

    return httpx.Client(
        auth=httpx.BasicAuth(username, password),
        timeout=httpx.Timeout(t),
        headers=headers,
        verify=v,
        follow_redirects=True,
    )


def build_base_url(address: str, port: int = None) -> str:
    """
    Normalize a management address into an https base URL.

    Bare hosts get the Prism port appended; addresses that already carry a
    scheme or an explicit port are kept as given.
    """
    address = address.strip().rstrip("/")
    if "://" in address:
        return address

    port = port if port is not None else config.PRISM_PORT
    if address.count(":") > 1 and not address.startswith("["):
        # bare IPv6 literal
        return f"https://[{address}]:{port}"
    host, _, maybe_port = address.rpartition(":")
    if host and maybe_port.isdigit():
        return f"https://{address}"
    return f"https://{address}:{port}"
