from __future__ import annotations

import json

from click.testing import CliRunner

from ucp_app.cmd import cli


def test_manifest_command(monkeypatch) -> None:
    monkeypatch.setenv("UCP_BASE_URL", "https://shop.example")

    result = CliRunner().invoke(cli, ["manifest"])

    assert result.exit_code == 0
    manifest = json.loads(result.stdout)
    assert manifest["ucp"]["services"]["dev.ucp.shopping"]["rest"]["endpoint"] == "https://shop.example/ucp/v1"


def test_manifest_command_with_feed(tmp_path) -> None:
    feed = tmp_path / "feed.json"
    feed.write_text(json.dumps({
        "units": [{"id": "discounts", "capabilities": [{"name": "dev.ucp.shopping.discount", "version": "2026-01-11"}]}]
    }))

    result = CliRunner().invoke(cli, ["manifest", "--feed", str(feed)])

    assert result.exit_code == 0
    names = [cap["name"] for cap in json.loads(result.stdout)["ucp"]["capabilities"]]
    assert "dev.ucp.shopping.discount" in names


def test_manifest_command_rejects_invalid_feed(tmp_path) -> None:
    feed = tmp_path / "feed.json"
    feed.write_text(json.dumps({"units": [{"id": "bad", "capabilities": [{"name": "x", "version": "1.0"}]}]}))

    result = CliRunner().invoke(cli, ["manifest", "--feed", str(feed)])

    assert result.exit_code == 1
    assert "Invalid version format '1.0'" in result.stdout


def test_negotiate_command_with_local_profile(tmp_path) -> None:
    profile = tmp_path / "profile.json"
    profile.write_text(json.dumps({
        "ucp": {
            "version": "2026-01-11",
            "capabilities": [
                {"name": "dev.ucp.shopping.checkout", "version": "2026-01-01"},
                {"name": "dev.ucp.shopping.order", "version": "2027-01-01"},
            ],
        }
    }))

    result = CliRunner().invoke(cli, ["negotiate", "--profile", str(profile)])

    assert result.exit_code == 0
    assert "[OK] dev.ucp.shopping.checkout 2026-01-01" in result.stdout
    assert "dev.ucp.shopping.order" not in result.stdout
