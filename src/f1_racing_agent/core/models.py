"""Pydantic data models — upstream boundary records, output records, and entrypoint inputs.

Three layers live here:

* ``Ergast*`` models mirror the Jolpica Ergast JSON payloads exactly as the API
  sends them. Numeric fields stay textual; coercion belongs to the normalizer.
* Output records (``Driver``, ``Race``, ``Result``, ...) are the stable shapes
  returned to callers. They serialize with camelCase keys.
* ``*Input`` models are the input contracts validated by the dispatcher.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SEASON_PATTERN = r"^(\d{4}|current)$"
ROUND_PATTERN = r"^([1-9]\d*|last)$"
DRIVER_ID_PATTERN = r"^[A-Za-z0-9_\-]+$"


# ─── Upstream boundary records ───────────────────────────────────────────────


class _Upstream(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ErgastLocation(_Upstream):
    locality: str = ""
    country: str = ""


class ErgastCircuit(_Upstream):
    circuit_id: Optional[str] = Field(None, alias="circuitId")
    circuit_name: str = Field(alias="circuitName")
    location: ErgastLocation = Field(default_factory=ErgastLocation, alias="Location")


class ErgastSession(_Upstream):
    """Date and optional UTC time of a race-weekend session."""

    date: str
    time: Optional[str] = None


class ErgastDriver(_Upstream):
    driver_id: str = Field(alias="driverId")
    given_name: str = Field(alias="givenName")
    family_name: str = Field(alias="familyName")
    code: Optional[str] = None
    permanent_number: Optional[str] = Field(None, alias="permanentNumber")
    nationality: Optional[str] = None
    date_of_birth: Optional[str] = Field(None, alias="dateOfBirth")
    url: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.given_name} {self.family_name}"


class ErgastConstructor(_Upstream):
    constructor_id: Optional[str] = Field(None, alias="constructorId")
    name: str
    nationality: Optional[str] = None


class ErgastTime(_Upstream):
    time: Optional[str] = None
    millis: Optional[str] = None


class ErgastAverageSpeed(_Upstream):
    units: Optional[str] = None
    speed: Optional[str] = None


class ErgastFastestLap(_Upstream):
    rank: Optional[str] = None
    lap: Optional[str] = None
    time: Optional[ErgastTime] = Field(None, alias="Time")
    average_speed: Optional[ErgastAverageSpeed] = Field(None, alias="AverageSpeed")


class ErgastResult(_Upstream):
    number: Optional[str] = None
    position: Optional[str] = None
    position_text: Optional[str] = Field(None, alias="positionText")
    points: Optional[str] = None
    driver: ErgastDriver = Field(alias="Driver")
    constructor: Optional[ErgastConstructor] = Field(None, alias="Constructor")
    grid: Optional[str] = None
    laps: Optional[str] = None
    status: Optional[str] = None
    time: Optional[ErgastTime] = Field(None, alias="Time")
    fastest_lap: Optional[ErgastFastestLap] = Field(None, alias="FastestLap")


class ErgastRace(_Upstream):
    season: str
    round: str
    race_name: str = Field(alias="raceName")
    url: Optional[str] = None
    circuit: ErgastCircuit = Field(alias="Circuit")
    date: str
    time: Optional[str] = None
    first_practice: Optional[ErgastSession] = Field(None, alias="FirstPractice")
    second_practice: Optional[ErgastSession] = Field(None, alias="SecondPractice")
    third_practice: Optional[ErgastSession] = Field(None, alias="ThirdPractice")
    sprint_qualifying: Optional[ErgastSession] = Field(None, alias="SprintQualifying")
    sprint: Optional[ErgastSession] = Field(None, alias="Sprint")
    qualifying: Optional[ErgastSession] = Field(None, alias="Qualifying")
    results: list[ErgastResult] = Field(default_factory=list, alias="Results")


class ErgastDriverStanding(_Upstream):
    position: Optional[str] = None
    position_text: Optional[str] = Field(None, alias="positionText")
    points: Optional[str] = None
    wins: Optional[str] = None
    driver: ErgastDriver = Field(alias="Driver")
    constructors: list[ErgastConstructor] = Field(default_factory=list, alias="Constructors")


class ErgastConstructorStanding(_Upstream):
    position: Optional[str] = None
    position_text: Optional[str] = Field(None, alias="positionText")
    points: Optional[str] = None
    wins: Optional[str] = None
    constructor: ErgastConstructor = Field(alias="Constructor")


class ErgastStandingsList(_Upstream):
    season: Optional[str] = None
    round: Optional[str] = None
    driver_standings: list[ErgastDriverStanding] = Field(default_factory=list, alias="DriverStandings")
    constructor_standings: list[ErgastConstructorStanding] = Field(
        default_factory=list, alias="ConstructorStandings"
    )


class ErgastRaceTable(_Upstream):
    season: Optional[str] = None
    round: Optional[str] = None
    driver_id: Optional[str] = Field(None, alias="driverId")
    races: list[ErgastRace] = Field(default_factory=list, alias="Races")


class ErgastStandingsTable(_Upstream):
    season: Optional[str] = None
    standings_lists: list[ErgastStandingsList] = Field(default_factory=list, alias="StandingsLists")


class ErgastDriverTable(_Upstream):
    drivers: list[ErgastDriver] = Field(default_factory=list, alias="Drivers")


class _RaceTableData(_Upstream):
    race_table: ErgastRaceTable = Field(alias="RaceTable")


class _StandingsTableData(_Upstream):
    standings_table: ErgastStandingsTable = Field(alias="StandingsTable")


class _DriverTableData(_Upstream):
    driver_table: ErgastDriverTable = Field(alias="DriverTable")


class RaceTableResponse(_Upstream):
    """``MRData.RaceTable`` envelope: schedules and results."""

    mr_data: _RaceTableData = Field(alias="MRData")

    @property
    def table(self) -> ErgastRaceTable:
        return self.mr_data.race_table

    @property
    def races(self) -> list[ErgastRace]:
        return self.mr_data.race_table.races


class StandingsResponse(_Upstream):
    """``MRData.StandingsTable`` envelope: driver and constructor standings."""

    mr_data: _StandingsTableData = Field(alias="MRData")

    @property
    def first_list(self) -> Optional[ErgastStandingsList]:
        lists = self.mr_data.standings_table.standings_lists
        return lists[0] if lists else None


class DriverTableResponse(_Upstream):
    """``MRData.DriverTable`` envelope: driver lookups."""

    mr_data: _DriverTableData = Field(alias="MRData")

    @property
    def drivers(self) -> list[ErgastDriver]:
        return self.mr_data.driver_table.drivers


# ─── Output records ──────────────────────────────────────────────────────────


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_output(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Driver(_Record):
    id: str
    name: str
    code: Optional[str] = None
    number: Optional[str] = None
    nationality: Optional[str] = None
    date_of_birth: Optional[str] = None
    profile_url: Optional[str] = None


class Constructor(_Record):
    name: str
    nationality: Optional[str] = None


class Race(_Record):
    season: Optional[str] = None
    round: Optional[int] = None
    name: str
    circuit: str
    location: str
    date: str
    time: Optional[str] = None
    sessions: Optional[dict[str, str]] = Field(
        None, description="Session name to ISO date/time; only sessions the calendar lists"
    )


class FastestLap(_Record):
    rank: Optional[int] = None
    lap: Optional[int] = None
    time: Optional[str] = None
    avg_speed: Optional[float] = None
    avg_speed_units: Optional[str] = None


class Result(_Record):
    position: Optional[int] = None
    driver: str
    code: Optional[str] = None
    team: Optional[str] = None
    laps: Optional[int] = None
    time: Optional[str] = Field(None, description="Finishing time, or the status when the car did not finish on the lead lap")
    status: Optional[str] = None
    points: Optional[float] = None
    grid: Optional[int] = None
    fastest_lap: Optional[FastestLap] = None


class DriverStanding(_Record):
    position: Optional[int] = None
    driver: str
    code: Optional[str] = None
    team: Optional[str] = None
    points: Optional[float] = None
    wins: Optional[int] = None


class ConstructorStanding(_Record):
    position: Optional[int] = None
    team: str
    nationality: Optional[str] = None
    points: Optional[float] = None
    wins: Optional[int] = None


class RecentResult(_Record):
    """One race from a driver's season, as listed on the driver profile."""

    race: str
    round: Optional[int] = None
    position: Optional[int] = None
    points: Optional[float] = None
    team: Optional[str] = None


class PodiumEntry(_Record):
    position: Optional[int] = None
    driver: str
    team: Optional[str] = None


class LastRace(_Record):
    name: str
    round: Optional[int] = None
    date: str
    podium: list[PodiumEntry] = Field(default_factory=list)


# ─── Entrypoint inputs ───────────────────────────────────────────────────────


class StandingsType(str, Enum):
    """Which championship tables the standings entrypoint returns."""

    DRIVERS = "drivers"
    CONSTRUCTORS = "constructors"
    BOTH = "both"


class EntrypointInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class OverviewInput(EntrypointInput):
    pass


class DriverInput(EntrypointInput):
    driver_id: str = Field(
        alias="driverId",
        min_length=1,
        pattern=DRIVER_ID_PATTERN,
        description="Driver ID (e.g., max_verstappen, norris, hamilton, leclerc)",
    )
    season: Optional[str] = Field(
        None, pattern=SEASON_PATTERN, description="Season for the results summary. Defaults to the latest complete season."
    )


class StandingsInput(EntrypointInput):
    season: Optional[str] = Field(
        None, pattern=SEASON_PATTERN, description="4-digit year or 'current'. Defaults to the latest complete season."
    )
    type: StandingsType = Field(StandingsType.BOTH, description="'drivers', 'constructors', or 'both'")


class ScheduleInput(EntrypointInput):
    season: str = Field("current", pattern=SEASON_PATTERN, description="4-digit year or 'current'")
    upcoming: bool = Field(False, description="Only races whose date is still ahead")


class ResultsInput(EntrypointInput):
    season: Optional[str] = Field(
        None, pattern=SEASON_PATTERN, description="4-digit year or 'current'. Defaults to the latest complete season."
    )
    round: str = Field("last", pattern=ROUND_PATTERN, description="Round number or 'last'")


class ReportInput(EntrypointInput):
    pass
