# tests/collectors/test_metric_collector.py
"""
Unit tests for the GroupedMetricCollector using respx.
"""

import json

import httpx
import pytest
import respx
from httpx import Response

from fixtures.prism_payloads import PC_ADDRESS, PC_URL, groups_payload
from prismreport.collectors.metric_collector import GroupedMetricCollector
from prismreport.core.exceptions import MalformedSeriesError, TransportError

GROUPS_URL = f"{PC_URL}/api/nutanix/v3/groups"


@pytest.fixture
def collector(client, settings):
    return GroupedMetricCollector(client, settings)


def test_build_query_groups_and_sorts_by_cluster_name(collector):
    query = collector.build_query("hypervisor_cpu_usage_ppm")

    assert query == {
        "entity_type": "cluster",
        "downsampling_interval": 3600,
        "group_member_attributes": [
            {"attribute": "cluster_name"},
            {"attribute": "hypervisor_cpu_usage_ppm", "operation": "AVG"},
        ],
        "group_member_sort_attribute": "cluster_name",
        "group_member_sort_order": "ASCENDING",
    }


def test_build_query_without_operation(collector):
    query = collector.build_query("controller_num_iops", operation=None)

    assert query["group_member_attributes"][1] == {"attribute": "controller_num_iops"}


@respx.mock
def test_fetch_returns_interleaved_values(collector):
    route = respx.post(GROUPS_URL).mock(
        return_value=Response(
            200, json=groups_payload("controller_num_iops", [("alpha", "5300"), ("beta", "1200")])
        )
    )

    values = collector.fetch(PC_ADDRESS, "controller_num_iops")

    assert values == ["alpha", "5300", "beta", "1200"]
    sent = json.loads(route.calls.last.request.content)
    assert sent["group_member_attributes"][1]["attribute"] == "controller_num_iops"
    assert route.calls.last.request.headers["authorization"].startswith("Basic ")


@respx.mock
def test_fetch_keeps_missing_samples_as_none(collector):
    payload = groups_payload("storage_usage_percent", [("alpha", "41")])
    payload["group_results"][0]["entity_results"][0]["data"][1]["values"] = []
    respx.post(GROUPS_URL).mock(return_value=Response(200, json=payload))

    assert collector.fetch(PC_ADDRESS, "storage_usage_percent") == ["alpha", None]


@respx.mock
def test_fetch_empty_result(collector):
    respx.post(GROUPS_URL).mock(return_value=Response(200, json={"group_results": []}))

    assert collector.fetch(PC_ADDRESS, "controller_num_iops") == []


@respx.mock
def test_fetch_without_group_results_fails(collector):
    respx.post(GROUPS_URL).mock(return_value=Response(200, json={"error": "unknown attribute"}))

    with pytest.raises(MalformedSeriesError, match="group_results"):
        collector.fetch(PC_ADDRESS, "bogus_attribute")


@respx.mock
def test_fetch_with_unexpected_structure_fails(collector):
    respx.post(GROUPS_URL).mock(
        return_value=Response(200, json={"group_results": [{"entity_results": ["not-an-entity"]}]})
    )

    with pytest.raises(MalformedSeriesError):
        collector.fetch(PC_ADDRESS, "controller_num_iops")


@respx.mock
def test_fetch_http_error_raises_transport_error(collector):
    respx.post(GROUPS_URL).mock(return_value=Response(401, json={"message": "unauthorized"}))

    with pytest.raises(TransportError, match="HTTP 401"):
        collector.fetch(PC_ADDRESS, "controller_num_iops")


@respx.mock
def test_fetch_timeout_raises_transport_error(collector):
    respx.post(GROUPS_URL).mock(side_effect=httpx.ConnectTimeout("timed out"))

    with pytest.raises(TransportError, match="Timed out"):
        collector.fetch(PC_ADDRESS, "controller_num_iops")


@respx.mock
def test_fetch_non_json_body_raises_transport_error(collector):
    respx.post(GROUPS_URL).mock(return_value=Response(200, text="<html>login</html>"))

    with pytest.raises(TransportError, match="not valid JSON"):
        collector.fetch(PC_ADDRESS, "controller_num_iops")


def test_collect_fetches_every_report_metric(mock_prism, collector):
    results = collector.collect(PC_ADDRESS)

    assert list(results) == [
        "hypervisor_cpu_usage_ppm",
        "hypervisor_memory_usage_ppm",
        "storage_usage_percent",
        "controller_avg_io_latency_usecs",
        "controller_num_iops",
    ]
    assert results["controller_num_iops"] == ["alpha", "5300", "beta", "1200"]
    assert mock_prism["groups"].call_count == 5


@respx.mock
def test_fetch_selects_values_by_datum_name(collector):
    payload = groups_payload("controller_num_iops", [("alpha", "5300"), ("beta", "1200")])
    # metric listed before the grouping key, plus an unrelated datum
    for entity in payload["group_results"][0]["entity_results"]:
        entity["data"].reverse()
        entity["data"].append({"name": "cluster_uuid", "values": [{"values": ["ignored"]}]})
    respx.post(GROUPS_URL).mock(return_value=Response(200, json=payload))

    assert collector.fetch(PC_ADDRESS, "controller_num_iops") == ["alpha", "5300", "beta", "1200"]


@respx.mock
def test_fetch_keeps_absent_metric_datum_as_none(collector):
    payload = groups_payload("controller_num_iops", [("alpha", "5300")])
    payload["group_results"][0]["entity_results"][0]["data"].pop()
    respx.post(GROUPS_URL).mock(return_value=Response(200, json=payload))

    assert collector.fetch(PC_ADDRESS, "controller_num_iops") == ["alpha", None]


@respx.mock
def test_fetch_entity_without_cluster_name_fails(collector):
    payload = groups_payload("controller_num_iops", [("alpha", "5300")])
    payload["group_results"][0]["entity_results"][0]["data"].pop(0)
    respx.post(GROUPS_URL).mock(return_value=Response(200, json=payload))

    with pytest.raises(MalformedSeriesError, match="has no cluster_name"):
        collector.fetch(PC_ADDRESS, "controller_num_iops")


@respx.mock
def test_fetch_with_values_mapping_instead_of_list_fails(collector):
    payload = groups_payload("controller_num_iops", [("alpha", "5300")])
    payload["group_results"][0]["entity_results"][0]["data"][1]["values"] = {"avg": "5300"}
    respx.post(GROUPS_URL).mock(return_value=Response(200, json=payload))

    with pytest.raises(MalformedSeriesError, match="Unexpected grouped-metrics structure"):
        collector.fetch(PC_ADDRESS, "controller_num_iops")
