from __future__ import annotations

from ucp_host.capabilities import CapabilityDescriptor, DiscoveryFeed
from ucp_host.demo import build_demo_host


def test_create_leaves_the_callers_feed_untouched(settings) -> None:
    # Arrange
    feed = DiscoveryFeed().register(
        "loyalty",
        capabilities=[CapabilityDescriptor(name="com.example.loyalty", version="2026-01-11")],
    )

    # Act
    first = build_demo_host(settings, feed)
    second = build_demo_host(settings, feed)

    # Assert
    assert len(feed) == 1
    assert "com.example.loyalty" in first.registry
    assert "com.example.loyalty" in second.registry
    assert second.registry.provider_unit == "DemoBusiness"
