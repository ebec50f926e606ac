from __future__ import annotations

import pytest

from ucp_host.capabilities import BusinessIdentity, CapabilityDescriptor, DiscoveryFeed
from ucp_host.config import UCPSettings
from ucp_host.demo import build_demo_host


@pytest.fixture()
def settings() -> UCPSettings:
    """Settings with every default and no environment influence."""
    return UCPSettings.from_env({})


@pytest.fixture()
def business_identity() -> BusinessIdentity:
    return BusinessIdentity(name="Acme Store", version="2026-01-11")


@pytest.fixture()
def provider_feed(business_identity) -> DiscoveryFeed:
    """A feed with one business unit that is also the primary provider."""
    return DiscoveryFeed().register(
        "acme.checkout",
        capabilities=[
            CapabilityDescriptor(
                name="dev.ucp.shopping.fulfillment",
                version="2026-01-11",
                extends="dev.ucp.shopping.checkout",
            )
        ],
        business=business_identity,
        primary_provider=True,
    )


@pytest.fixture()
def demo_host(settings):
    return build_demo_host(settings)
