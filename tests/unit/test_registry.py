from __future__ import annotations

import pytest

from ucp_host.capabilities import (
    STANDARD_CAPABILITIES,
    BusinessIdentity,
    CapabilityDescriptor,
    DiscoveryFeed,
)
from ucp_host.errors import (
    ConfigurationError,
    InvalidVersionFormat,
    MultipleBusinessIdentities,
    MultipleCapabilityProviders,
    TransportRequirementViolated,
)
from ucp_host.registry import CapabilityRegistry


def _cap(name: str, version: str = "2026-01-11") -> CapabilityDescriptor:
    return CapabilityDescriptor(name=name, version=version)


def test_build_keeps_distinct_capabilities_independent() -> None:
    """Each capability name maps to its own descriptor."""
    # Arrange: one unit declaring two capabilities.
    feed = DiscoveryFeed().register("unit", capabilities=[_cap("a.b.one"), _cap("a.b.two", "2026-02-01")])

    # Act: build the registry.
    registry = CapabilityRegistry.build(feed)

    # Assert: both are retrievable and unrelated.
    assert registry.get("a.b.one").version == "2026-01-11"
    assert registry.get("a.b.two").version == "2026-02-01"
    assert registry.get("a.b.missing") is None


def test_build_last_declaration_wins() -> None:
    """Redeclaring a capability replaces the earlier version."""
    # Arrange: the same name declared twice by two units.
    feed = (
        DiscoveryFeed()
        .register("first", capabilities=[_cap("a.b.one", "2026-01-01")])
        .register("second", capabilities=[_cap("a.b.one", "2026-03-01")])
    )

    # Act
    registry = CapabilityRegistry.build(feed)

    # Assert: only the later version remains.
    assert registry.get("a.b.one").version == "2026-03-01"
    assert [cap.name for cap in registry.all()] == ["a.b.one"]


@pytest.mark.parametrize(
    "version",
    ["1.0", "2026-1-1", "2026/01/11", "20260111", "", "2026-01-11\n", "\u0662\u0660\u0662\u0666-01-11"],
)
def test_build_rejects_invalid_version(version: str) -> None:
    """Versions must be YYYY-MM-DD dates."""
    feed = DiscoveryFeed().register("unit", capabilities=[_cap("a.b.one", version)])

    with pytest.raises(InvalidVersionFormat) as excinfo:
        CapabilityRegistry.build(feed)

    assert excinfo.value.version == version
    assert isinstance(excinfo.value, ConfigurationError)


def test_build_rejects_multiple_business_identities() -> None:
    """Two units declaring a business identity is a configuration error."""
    feed = (
        DiscoveryFeed()
        .register("shop.one", business=BusinessIdentity(name="One"))
        .register("shop.two", business={"name": "Two", "version": "2026-01-11"})
    )

    with pytest.raises(MultipleBusinessIdentities) as excinfo:
        CapabilityRegistry.build(feed)

    assert excinfo.value.units == ["shop.one", "shop.two"]


def test_build_rejects_multiple_capability_providers() -> None:
    feed = (
        DiscoveryFeed()
        .register("provider.one", primary_provider=True)
        .register("provider.two", primary_provider=True)
    )

    with pytest.raises(MultipleCapabilityProviders):
        CapabilityRegistry.build(feed)


def test_build_rejects_capabilities_on_unreachable_unit() -> None:
    """Capability-bearing units must be reachable over REST."""
    feed = DiscoveryFeed().register(
        "internal.unit", capabilities=[_cap("a.b.one")], transport_reachable=False
    )

    with pytest.raises(TransportRequirementViolated) as excinfo:
        CapabilityRegistry.build(feed)

    assert excinfo.value.unit == "internal.unit"


def test_build_allows_unreachable_unit_without_capabilities() -> None:
    feed = DiscoveryFeed().register("internal.unit", transport_reachable=False)

    registry = CapabilityRegistry.build(feed)

    assert len(registry) == 0


def test_build_seeds_standard_capabilities_for_business_provider(provider_feed, business_identity) -> None:
    """A business with a primary provider implies checkout, order and identity linking."""
    # Act
    registry = CapabilityRegistry.build(provider_feed)

    # Assert: declared plus standard capabilities are present.
    names = [cap.name for cap in registry.all()]
    assert names[0] == "dev.ucp.shopping.fulfillment"
    for standard in STANDARD_CAPABILITIES:
        assert registry.get(standard.name) == standard
    assert registry.business_identity() == business_identity
    assert registry.provider_unit == "acme.checkout"


def test_build_does_not_seed_without_business() -> None:
    feed = DiscoveryFeed().register("provider", primary_provider=True)

    registry = CapabilityRegistry.build(feed)

    assert registry.all() == []
    assert registry.business_identity() is None


def test_registry_is_read_only(provider_feed) -> None:
    registry = CapabilityRegistry.build(provider_feed)

    snapshot = registry.all()
    snapshot.clear()

    assert len(registry.all()) == 4


def test_feed_from_config_builds_records() -> None:
    """Static configuration produces the same feed as explicit registration."""
    config = {
        "units": [
            {
                "id": "shop",
                "business": {"name": "Shop", "version": "2026-01-11"},
                "capabilities": [
                    {"name": "dev.ucp.shopping.discount", "version": "2026-01-11", "schema": "https://x/d.json"}
                ],
                "provider": True,
            }
        ]
    }

    registry = CapabilityRegistry.build(DiscoveryFeed.from_config(config))

    assert registry.get("dev.ucp.shopping.discount").schema_url == "https://x/d.json"
    assert registry.business_identity().name == "Shop"
