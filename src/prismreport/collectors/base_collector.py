# src/prismreport/collectors/base_collector.py
"""
This module defines the abstract base class for all Prism collectors.
Every collector shares one authenticated httpx.Client and maps transport
failures onto the prismreport error taxonomy, so the run coordinator only
ever sees PrismReportError subclasses.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Type

import httpx

from ..core.config import Config
from ..core.config import config as global_config
from ..core.exceptions import TransportError
from ..utils.http_client import build_base_url

logger = logging.getLogger(__name__)


class BaseCollector(ABC):
    """
    Abstract Base Class for all Prism collectors.
    """

    #: Exception raised for transport and HTTP failures of this collector.
    error_class: Type[TransportError] = TransportError

    def __init__(self, client: httpx.Client, settings: Config = None):
        self.client = client
        self.settings = settings or global_config

    @abstractmethod
    def collect(self, address: str) -> Any:
        """
        Fetch data from the management endpoint at `address`, parse it and
        return it as models.
        """
        pass

    def _url(self, address: str, path: str) -> str:
        return f"{build_base_url(address, self.settings.PRISM_PORT)}{path}"

    def _request(self, method: str, url: str, **kwargs) -> Any:
        """
        Issue one blocking request and return the decoded JSON body.

        Raises:
            TransportError (or `error_class`): On timeout, connection failure,
                HTTP error status or a body that is not JSON.
        """
        logger.debug("%s %s", method, url)
        try:
            response = self.client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise self.error_class(f"Timed out after {self.settings.REQUEST_TIMEOUT}s: {method} {url}") from e
        except httpx.HTTPStatusError as e:
            raise self.error_class(f"HTTP {e.response.status_code} from {method} {url}") from e
        except httpx.HTTPError as e:
            raise self.error_class(f"Request failed for {method} {url}: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise self.error_class(f"Response from {method} {url} is not valid JSON") from e
