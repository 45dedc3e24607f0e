"""
Tests for the OS service.
"""

import pytest

IMAGES_URL = "/device-types/v1/raspberrypi3/images"
VERSIONS = ["2.2.0+rev1", "2.29.2+rev1", "2.30.0-beta.1", "2.0.0+rev1", "1.26.0"]


class TestSupportedVersions:
    """Tests for get_supported_versions."""

    @pytest.mark.asyncio
    async def test_sorted_with_recommended(self, fake_api, client):
        fake_api.add("GET", IMAGES_URL, json={"versions": VERSIONS})

        result = await client.os.get_supported_versions("raspberrypi3")

        assert result.versions == ["2.30.0-beta.1", "2.29.2+rev1", "2.2.0+rev1", "2.0.0+rev1", "1.26.0"]
        assert result.latest == "2.30.0-beta.1"
        assert result.recommended == "2.29.2+rev1"
        assert result.default == "2.29.2+rev1"

    @pytest.mark.asyncio
    async def test_cached_per_device_type(self, fake_api, client):
        fake_api.add("GET", IMAGES_URL, json={"versions": VERSIONS})

        await client.os.get_supported_versions("raspberrypi3")
        await client.os.get_supported_versions("raspberrypi3")

        assert len(fake_api.urls("GET")) == 1

    @pytest.mark.asyncio
    async def test_only_prereleases(self, fake_api, client):
        fake_api.add("GET", IMAGES_URL, json={"versions": ["2.30.0-beta.1"]})

        result = await client.os.get_supported_versions("raspberrypi3")

        assert result.recommended is None
        assert result.default == "2.30.0-beta.1"


class TestUpdateVersions:
    """Tests for get_supported_os_update_versions."""

    @pytest.mark.asyncio
    async def test_filters_by_update_action(self, fake_api, client):
        fake_api.add("GET", IMAGES_URL, json={"versions": VERSIONS})

        result = await client.os.get_supported_os_update_versions("raspberrypi3", "2.2.0+rev1")

        assert result.versions == ["2.29.2+rev1"]
        assert result.recommended == "2.29.2+rev1"
        assert result.current == "2.2.0+rev1"

    @pytest.mark.asyncio
    async def test_nothing_available(self, fake_api, client):
        fake_api.add("GET", IMAGES_URL, json={"versions": ["2.2.0+rev1"]})

        result = await client.os.get_supported_os_update_versions("raspberrypi3", "2.2.0+rev1")

        assert result.versions == []
        assert result.recommended is None


class TestSyncOsService:
    """Tests for the synchronous OS service."""

    def test_supported_versions(self, fake_api, sync_client):
        fake_api.add("GET", IMAGES_URL, json={"versions": ["2.0.0+rev1"]})

        assert sync_client.os.get_supported_versions("raspberrypi3").versions == ["2.0.0+rev1"]

    def test_architecture_compatibility(self, sync_client):
        assert sync_client.os.is_architecture_compatible_with("aarch64", "armv7hf") is True
