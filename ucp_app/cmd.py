# Copyright 2026 UCP Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
UCP Host CLI - Command line interface to run and inspect a UCP host.

Usage:
    python -m ucp_app --help
    python -m ucp_app serve
    python -m ucp_app manifest
    python -m ucp_app negotiate --profile https://platform.example/profile.json
    python -m ucp_app mcp
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
import httpx

from ucp_host.capabilities import DiscoveryFeed
from ucp_host.config import UCPSettings
from ucp_host.demo import build_demo_host
from ucp_host.errors import ConfigurationError, UCPError
from ucp_host.negotiation import UCPProfile


def print_header(title: str):
    """Print a header with borders."""
    border = "=" * (len(title) + 4)
    print(f"\n{border}")
    print(f"| {title} |")
    print(f"{border}\n")


def print_success(msg: str):
    print(f"[OK] {msg}")


def print_error(msg: str):
    print(f"[ERROR] {msg}")


def print_info(msg: str):
    print(f"[INFO] {msg}")


def _load_host(feed_path: Optional[str]):
    settings = UCPSettings.from_env()
    logging.basicConfig(level=settings.log_level)
    feed = DiscoveryFeed.from_json_file(feed_path) if feed_path else None
    return build_demo_host(settings, feed)


feed_option = click.option(
    "--feed", "feed_path", type=click.Path(exists=True, dir_okay=False), default=None,
    help="JSON file declaring additional capability units",
)


@click.group()
def cli():
    """UCP Host CLI"""
    pass


@cli.command()
@feed_option
def serve(feed_path: Optional[str]):
    """Start the UCP host server (discovery, REST, JSON-RPC)."""
    from ucp_host.server import run_server

    try:
        host = _load_host(feed_path)
    except ConfigurationError as e:
        print_error(f"Invalid host configuration: {e.message}")
        sys.exit(1)

    print_header("Starting UCP Host Server")
    print(f"URL: {host.settings.public_url}")
    print("Press Ctrl+C to stop\n")
    run_server(host)


@cli.command()
def mcp():
    """Start the standalone MCP server (streamable HTTP)."""
    from ucp_host.mcp_server import build_mcp_server

    host = _load_host(None)
    print_header("Starting MCP Server")
    print(f"URL: {host.settings.public_url}/mcp")
    build_mcp_server(host).run(transport="streamable-http")


@cli.command()
@feed_option
def manifest(feed_path: Optional[str]):
    """Print the discovery manifest."""
    try:
        host = _load_host(feed_path)
        click.echo(json.dumps(host.manifest(), indent=2))
    except UCPError as e:
        print_error(e.message)
        sys.exit(1)


@cli.command()
@click.option("--profile", "profile_ref", required=True,
              help="Platform profile URI or path to a local profile JSON file")
@feed_option
def negotiate(profile_ref: str, feed_path: Optional[str]):
    """Negotiate a platform profile against this host's capabilities."""
    try:
        host = _load_host(feed_path)
    except ConfigurationError as e:
        print_error(f"Invalid host configuration: {e.message}")
        sys.exit(1)

    try:
        if profile_ref.startswith(("http://", "https://")):
            profile = host.negotiator.fetch_platform_profile(profile_ref)
        else:
            profile = UCPProfile.from_document(json.loads(Path(profile_ref).read_text(encoding="utf-8")))
    except httpx.HTTPError as e:
        print_error(f"Cannot fetch platform profile: {e}")
        sys.exit(1)
    except (OSError, ValueError) as e:
        print_error(f"Cannot read platform profile: {e}")
        sys.exit(1)

    negotiated = host.negotiate_profile(profile)
    print_header("Negotiated Capabilities")
    if not negotiated:
        print_info("No capabilities in common")
    for cap in negotiated:
        print_success(f"{cap.name} {cap.version}")


if __name__ == "__main__":
    cli()
