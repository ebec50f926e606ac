from __future__ import annotations

import pytest

from ucp_host.capabilities import CapabilityDescriptor, DiscoveryFeed
from ucp_host.config import UCPSettings
from ucp_host.errors import NoBusinessIdentity, UCPLookupError
from ucp_host.manifest import ManifestBuilder, ServiceConfig, TransportEndpoint, default_endpoints
from ucp_host.payment import MockPaymentHandler
from ucp_host.registry import CapabilityRegistry

BASE_URL = "https://shop.example"


def test_manifest_renders_services_and_capabilities(provider_feed) -> None:
    registry = CapabilityRegistry.build(provider_feed)
    endpoints = [
        TransportEndpoint(transport="rest", endpoint="/ucp/v1", schema="https://ucp.dev/rest.json"),
        TransportEndpoint(transport="embedded", schema="https://ucp.dev/embedded.json"),
    ]

    manifest = ManifestBuilder().build(registry, BASE_URL, endpoints)

    ucp = manifest["ucp"]
    assert ucp["version"] == "2026-01-11"
    service = ucp["services"]["dev.ucp.shopping"]
    assert service["rest"] == {"endpoint": "https://shop.example/ucp/v1", "schema": "https://ucp.dev/rest.json"}
    assert service["embedded"] == {"schema": "https://ucp.dev/embedded.json"}
    assert ucp["capabilities"][0] == {
        "name": "dev.ucp.shopping.fulfillment",
        "version": "2026-01-11",
        "extends": "dev.ucp.shopping.checkout",
    }
    assert "payment" not in manifest


def test_manifest_omits_empty_optional_fields() -> None:
    feed = DiscoveryFeed().register(
        "shop",
        capabilities=[CapabilityDescriptor(name="a.b.c", version="2026-01-11", spec="", schema="")],
        business={"name": "Shop"},
    )
    registry = CapabilityRegistry.build(feed)

    manifest = ManifestBuilder().build(registry, BASE_URL, [])

    assert manifest["ucp"]["capabilities"] == [{"name": "a.b.c", "version": "2026-01-11"}]


def test_manifest_requires_business_identity() -> None:
    registry = CapabilityRegistry.build(DiscoveryFeed().register("unit", capabilities=[]))

    with pytest.raises(NoBusinessIdentity) as excinfo:
        ManifestBuilder().build(registry, BASE_URL, [])

    assert isinstance(excinfo.value, UCPLookupError)


def test_manifest_lists_payment_handlers(provider_feed) -> None:
    registry = CapabilityRegistry.build(provider_feed)

    manifest = ManifestBuilder().build(
        registry, BASE_URL, [], payment_handlers=[MockPaymentHandler().declaration()]
    )

    handler = manifest["payment"]["handlers"][0]
    assert handler["name"] == "dev.ucp.mock_payment"
    assert handler["instrument_schemas"]


def test_default_endpoints_follow_enabled_transports() -> None:
    settings = UCPSettings(mcp_enabled=True, embedded_enabled=True)

    endpoints = default_endpoints(settings)

    assert [e.transport for e in endpoints] == ["rest", "mcp", "embedded"]
    assert endpoints[2].endpoint is None


def test_service_config_renders_each_binding() -> None:
    service = ServiceConfig(
        name="com.example.service",
        version="2026-01-11",
        spec=None,
        endpoints=[
            TransportEndpoint(transport="rest", endpoint="https://api.example/v1"),
            TransportEndpoint(transport="mcp", endpoint="mcp", schema="https://ucp.dev/mcp.json"),
        ],
    )

    entry = service.render(BASE_URL + "/")

    assert entry == {
        "version": "2026-01-11",
        "rest": {"endpoint": "https://api.example/v1"},
        "mcp": {"endpoint": "https://shop.example/mcp", "schema": "https://ucp.dev/mcp.json"},
    }


def test_manifest_uses_builder_service_name(provider_feed) -> None:
    registry = CapabilityRegistry.build(provider_feed)
    builder = ManifestBuilder(service_name="com.example.service", service_spec="https://example.com/spec")

    services = builder.build(registry, BASE_URL, [TransportEndpoint(transport="rest", endpoint="/v1")])["ucp"]["services"]

    assert services == {
        "com.example.service": {
            "version": "2026-01-11",
            "spec": "https://example.com/spec",
            "rest": {"endpoint": "https://shop.example/v1"},
        }
    }
