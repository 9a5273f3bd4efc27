"""Tests for the Ergast client's failure classification and boundary parsing."""

from __future__ import annotations

import httpx
import pytest

from f1_racing_agent.core.clients.ergast import ErgastClient
from f1_racing_agent.core.errors import NetworkError, UpstreamError, UpstreamShapeError
from f1_racing_agent.core.models import DriverTableResponse
from tests.fakes.fake_ergast import API_BASE, NORRIS, FakeErgast


def _client(fake: FakeErgast) -> ErgastClient:
    return ErgastClient(API_BASE, timeout=5.0, transport=fake.transport)


class TestFetchJson:
    @pytest.mark.asyncio
    async def test_builds_url_from_base_and_path(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json={"ok": True})

        client = ErgastClient(API_BASE + "/", transport=httpx.MockTransport(handler))

        assert await client.fetch_json("/current.json") == {"ok": True}
        assert seen == ["https://ergast.test/f1/current.json"]

    @pytest.mark.parametrize("status", [400, 404, 429, 500, 503])
    @pytest.mark.asyncio
    async def test_non_success_status(self, status: int) -> None:
        fake = FakeErgast()
        fake.add("/current.json", status)

        with pytest.raises(UpstreamError) as exc_info:
            await _client(fake).fetch_json("/current.json")

        assert exc_info.value.status_code == status
        assert exc_info.value.url == f"{API_BASE}/current.json"
        assert not exc_info.value.is_client_error

    @pytest.mark.asyncio
    async def test_single_attempt_only(self) -> None:
        fake = FakeErgast()
        fake.add("/current.json", 503)

        with pytest.raises(UpstreamError):
            await _client(fake).fetch_json("/current.json")

        assert fake.calls == ["/current.json"]

    @pytest.mark.parametrize("error", [httpx.ConnectError("refused"), httpx.ReadTimeout("slow")])
    @pytest.mark.asyncio
    async def test_transport_failure(self, error: Exception) -> None:
        fake = FakeErgast()
        fake.add("/current.json", error)

        with pytest.raises(NetworkError) as exc_info:
            await _client(fake).fetch_json("/current.json")

        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_non_json_body(self) -> None:
        client = ErgastClient(API_BASE, transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>")))

        with pytest.raises(UpstreamShapeError):
            await client.fetch_json("/current.json")


class TestFetchModel:
    @pytest.mark.asyncio
    async def test_parses_boundary_model(self) -> None:
        fake = FakeErgast()
        fake.add("/drivers/norris.json", {"MRData": {"DriverTable": {"Drivers": [NORRIS]}}})

        response = await _client(fake).driver("norris")

        assert isinstance(response, DriverTableResponse)
        assert response.drivers[0].full_name == "Lando Norris"
        assert response.drivers[0].permanent_number == "4"

    @pytest.mark.asyncio
    async def test_shape_mismatch_names_path(self) -> None:
        fake = FakeErgast()
        fake.add("/current.json", {"MRData": {"RaceTable": {"Races": [{"season": "2026"}]}}})

        with pytest.raises(UpstreamShapeError) as exc_info:
            await _client(fake).schedule("current")

        assert exc_info.value.path == "/current.json"
        assert "MRData.RaceTable.Races.0" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_typed_helper_paths(self) -> None:
        fake = FakeErgast()
        empty_races = {"MRData": {"RaceTable": {"Races": []}}}
        empty_standings = {"MRData": {"StandingsTable": {"StandingsLists": []}}}
        fake.add("/2025/driverStandings.json", empty_standings)
        fake.add("/2025/constructorStandings.json", empty_standings)
        fake.add("/2024/drivers/norris/results.json", empty_races)
        fake.add("/2025/last/results.json", empty_races)
        client = _client(fake)

        await client.driver_standings("2025")
        await client.constructor_standings("2025")
        await client.driver_results("2024", "norris")
        await client.race_results("2025", "last")

        assert fake.calls == [
            "/2025/driverStandings.json",
            "/2025/constructorStandings.json",
            "/2024/drivers/norris/results.json",
            "/2025/last/results.json",
        ]
