"""
Tests for CLI module.
"""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest
from click.testing import CliRunner

from devfleet.cli import main
from devfleet.client import AsyncDevFleetClient
from devfleet.config import SDKSettings

API_URL = "https://api.devfleet.test"


@pytest.fixture
def patched_client(fake_api):
    """Route CLI clients to the fake API."""

    def factory(api_key=None, **kwargs):
        return AsyncDevFleetClient(
            api_key=api_key,
            settings=SDKSettings(api_url=API_URL),
            transport=httpx.MockTransport(fake_api.handler),
        )

    with patch("devfleet.cli.AsyncDevFleetClient", side_effect=factory) as mock_client:
        yield mock_client


class TestCLIMain:
    """Test main CLI group."""

    def test_help(self):
        """--help shows usage."""
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "devfleet SDK" in result.output

    def test_version(self):
        """--version shows version."""
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "version" in result.output

    def test_no_api_key(self):
        """Commands fail without API key."""
        runner = CliRunner()
        result = runner.invoke(main, ["devices"], env={"DEVFLEET_API_KEY": ""})
        assert result.exit_code == 1
        assert "DEVFLEET_API_KEY" in result.output


class TestCLIDevice:
    """Test device commands."""

    def test_device_help(self):
        """device --help lists subcommands."""
        runner = CliRunner()
        result = runner.invoke(main, ["device", "--help"])
        assert result.exit_code == 0
        assert "reboot" in result.output
        assert "os-update" in result.output

    def test_reboot(self, fake_api, patched_client):
        """device reboot sends the force flag."""
        fake_api.add_pine("GET", "/v5/device?", [{"id": 5}])
        fake_api.add("POST", "/supervisor/v1/reboot", json={"Data": "OK"})

        runner = CliRunner()
        result = runner.invoke(main, ["--api-key", "k", "device", "reboot", "7cf", "--force"])

        assert result.exit_code == 0
        assert "Rebooting" in result.output
        assert fake_api.body(fake_api.last("POST")) == {"deviceId": 5, "data": {"force": True}}
        patched_client.assert_called_once_with(api_key="k")

    def test_sdk_error_exits_1(self, fake_api, patched_client):
        """SDK errors are printed and exit with code 1."""
        fake_api.add_pine("GET", "/v5/device?", [{"id": 5}])
        fake_api.add("POST", "/supervisor/v1/reboot", status=423, text="locked")

        runner = CliRunner()
        result = runner.invoke(main, ["--api-key", "k", "device", "reboot", "7cf"])

        assert result.exit_code == 1
        assert "Supervisor locked" in result.output

    def test_pin_numeric_release(self, fake_api, patched_client):
        """Digits are passed as a release id."""
        fake_api.add_pine(
            "GET",
            "/v5/device?",
            [{"id": 5, "belongs_to__application": [{"id": 10, "owns__release": [{"id": 42}]}]}],
        )
        fake_api.add("PATCH", "/v5/device(5)", text="OK")

        runner = CliRunner()
        result = runner.invoke(main, ["--api-key", "k", "device", "pin", "7cf", "42"])

        assert result.exit_code == 0
        assert "id eq 42" in fake_api.urls("GET")[0]

    def test_os_update_lists_versions(self, fake_api, patched_client):
        """os-update without a version lists update targets."""
        fake_api.add_pine(
            "GET",
            "/v5/device?",
            [{"device_type": "raspberrypi3", "os_version": "balenaOS 2.2.0+rev1", "os_variant": "prod"}],
        )
        fake_api.add(
            "GET",
            "/device-types/v1/raspberrypi3/images",
            json={"versions": ["2.29.2+rev1", "2.2.0+rev1"]},
        )

        runner = CliRunner()
        result = runner.invoke(main, ["--api-key", "k", "device", "os-update", "7cf"])

        assert result.exit_code == 0
        assert "2.29.2+rev1" in result.output
        assert "recommended" in result.output


class TestCLIVariables:
    """Test env and tags commands."""

    def test_env_list(self, fake_api, patched_client):
        fake_api.add_pine("GET", "/v5/device?", [{"id": 5}])
        fake_api.add_pine(
            "GET",
            "/v5/device_environment_variable?",
            [{"id": 1, "name": "EDITOR", "value": "vim"}],
        )

        runner = CliRunner()
        result = runner.invoke(main, ["--api-key", "k", "env", "list", "7cf"])

        assert result.exit_code == 0
        assert "EDITOR" in result.output
        assert "vim" in result.output

    def test_env_list_null_value(self, fake_api, patched_client):
        fake_api.add_pine("GET", "/v5/device?", [{"id": 5}])
        fake_api.add_pine(
            "GET",
            "/v5/device_environment_variable?",
            [{"id": 1, "name": "EDITOR", "value": None}],
        )

        runner = CliRunner()
        result = runner.invoke(main, ["--api-key", "k", "env", "list", "7cf"])

        assert result.exit_code == 0
        assert "EDITOR" in result.output
        assert "None" not in result.output

    def test_tags_list_empty(self, fake_api, patched_client):
        fake_api.add_pine("GET", "/v5/device?", [{"id": 5}])
        fake_api.add_pine("GET", "/v5/device_tag?", [])

        runner = CliRunner()
        result = runner.invoke(main, ["--api-key", "k", "tags", "list", "7cf"])

        assert result.exit_code == 0
        assert "None set" in result.output

    def test_env_set(self, fake_api, patched_client):
        fake_api.add_pine("GET", "/v5/device?", [{"id": 5}])
        fake_api.add("POST", "/v5/device_environment_variable", status=201, json={"id": 1})

        runner = CliRunner()
        result = runner.invoke(main, ["--api-key", "k", "env", "set", "7cf", "EDITOR", "vim"])

        assert result.exit_code == 0
        assert fake_api.body(fake_api.last("POST")) == {"device": 5, "name": "EDITOR", "value": "vim"}


class TestCLIDeviceTypes:
    """Test device-types command."""

    def test_lists_types(self, fake_api, patched_client):
        fake_api.add("GET", "/device-types/v1", json=[{"slug": "intel-nuc", "name": "Intel NUC", "arch": "amd64"}])

        runner = CliRunner()
        result = runner.invoke(main, ["--api-key", "k", "device-types"])

        assert result.exit_code == 0
        assert "intel-nuc" in result.output
