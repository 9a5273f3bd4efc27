"""Shared fixtures: a fake Ergast API and a dispatcher wired to it."""

from __future__ import annotations

import pytest

from f1_racing_agent.config import Settings
from f1_racing_agent.entrypoints import create_dispatcher, initialize
from tests.fakes.fake_ergast import (
    API_BASE,
    FERRARI,
    MCLAREN,
    MERCEDES,
    NORRIS,
    NOW,
    PIASTRI,
    RED_BULL,
    RUSSELL,
    VERSTAPPEN,
    FakeErgast,
    constructor_standing,
    constructor_standings_body,
    driver_standing,
    driver_standings_body,
    make_race,
    race_result,
    race_table_body,
)

DRIVER_ROWS = [
    driver_standing(1, NORRIS, MCLAREN, "423", "7"),
    driver_standing(2, VERSTAPPEN, RED_BULL, "421", "8"),
    driver_standing(3, PIASTRI, MCLAREN, "410", "7"),
    driver_standing(4, RUSSELL, MERCEDES, "319", "2"),
]

CONSTRUCTOR_ROWS = [
    constructor_standing(1, MCLAREN, "833", "14"),
    constructor_standing(2, MERCEDES, "469", "2"),
    constructor_standing(3, RED_BULL, "451", "8"),
    constructor_standing(4, FERRARI, "398", "0"),
]

CURRENT_SCHEDULE = [
    make_race(1, "Australian Grand Prix", "2026-03-08", season="2026"),
    make_race(9, "Spanish Grand Prix", "2026-06-14", season="2026"),
    make_race(10, "Austrian Grand Prix", "2026-06-28", season="2026",
              FirstPractice={"date": "2026-06-26", "time": "11:30:00Z"},
              Qualifying={"date": "2026-06-27", "time": "14:00:00Z"}),
    make_race(11, "British Grand Prix", "2026-07-05", season="2026"),
    make_race(12, "Belgian Grand Prix", "2026-07-26", season="2026"),
    make_race(13, "Hungarian Grand Prix", "2026-08-02", season="2026"),
]

LAST_RACE = make_race(24, "Abu Dhabi Grand Prix", "2025-12-07", results=[
    race_result(1, VERSTAPPEN, RED_BULL, "25", finish_time="1:26:07.469", grid="1",
                fastest_lap={"rank": "2", "lap": "45", "Time": {"time": "1:26.725"},
                             "AverageSpeed": {"units": "kph", "speed": "219.226"}}),
    race_result(2, PIASTRI, MCLAREN, "18", finish_time="+12.594", grid="3"),
    race_result(3, NORRIS, MCLAREN, "15", finish_time="+16.572", grid="2"),
    race_result(4, RUSSELL, MERCEDES, "12", laps="57", status="+1 Lap", grid="4"),
])


def install_defaults(fake: FakeErgast) -> FakeErgast:
    fake.add("/2025/driverStandings.json", driver_standings_body(DRIVER_ROWS))
    fake.add("/2025/constructorStandings.json", constructor_standings_body(CONSTRUCTOR_ROWS))
    fake.add("/current.json", race_table_body(CURRENT_SCHEDULE, season="2026"))
    fake.add("/2025/last/results.json", race_table_body([LAST_RACE], round="24"))
    fake.add("/2025/24/results.json", race_table_body([LAST_RACE], round="24"))
    fake.add("/drivers/norris.json", {"MRData": {"DriverTable": {"driverId": "norris", "Drivers": [NORRIS]}}})
    fake.add("/drivers/unknown_id.json", {"MRData": {"DriverTable": {"driverId": "unknown_id", "Drivers": []}}})
    return fake


@pytest.fixture
def settings() -> Settings:
    return Settings(api_base=API_BASE, latest_complete_season="2025")


@pytest.fixture
def ergast() -> FakeErgast:
    return install_defaults(FakeErgast())


@pytest.fixture
def registry():
    return initialize()


@pytest.fixture
def dispatcher(settings, ergast, registry):
    return create_dispatcher(settings, registry, transport=ergast.transport, clock=lambda: NOW)
