# tests/conftest.py

import json

import pytest
import respx
from httpx import Response

from fixtures.prism_payloads import (
    DEFAULT_CLUSTERS,
    DEFAULT_METRICS,
    DEFAULT_POOLS,
    PC_URL,
    groups_payload,
    inventory_payload,
    storage_payload,
)
from prismreport.core.config import Config
from prismreport.utils.http_client import get_http_client


@pytest.fixture
def settings():
    """A Config instance with pacing disabled and fixed query settings."""
    config = Config()
    config.PRISM_PORT = 9440
    config.REQUEST_TIMEOUT = 5.0
    config.DOWNSAMPLING_INTERVAL = 3600
    config.INVENTORY_PAGE_SIZE = 500
    config.CLUSTER_PACING_SECONDS = 0.0
    config.INSTANCE_PACING_SECONDS = 0.0
    return config


@pytest.fixture
def mock_prism():
    """
    Register a Prism Central at PC_ADDRESS and one Prism Element per cluster.

    Yields a dict of the registered routes so tests can inspect or override
    them (e.g. routes["storage"]["10.0.0.20"].mock(side_effect=...)).
    """

    def groups_side_effect(request):
        body = json.loads(request.content)
        attribute = body["group_member_attributes"][1]["attribute"]
        values = DEFAULT_METRICS[attribute]
        return Response(200, json=groups_payload(attribute, sorted(values.items())))

    respx_mock = respx.mock(assert_all_called=False)
    routes = {
        "router": respx_mock,
        "inventory": respx_mock.post(f"{PC_URL}/api/nutanix/v3/clusters/list").mock(
            return_value=Response(200, json=inventory_payload(DEFAULT_CLUSTERS))
        ),
        "groups": respx_mock.post(f"{PC_URL}/api/nutanix/v3/groups").mock(side_effect=groups_side_effect),
        "storage": {},
    }
    for ip, pools in DEFAULT_POOLS.items():
        routes["storage"][ip] = respx_mock.get(
            f"https://{ip}:9440/PrismGateway/services/rest/v1/storage_pools"
        ).mock(return_value=Response(200, json=storage_payload(pools)))
    with respx_mock:
        yield routes


@pytest.fixture
def client(settings):
    with get_http_client("admin", "secret", timeout=settings.REQUEST_TIMEOUT, verify=False) as c:
        yield c
