"""Normalization of Ergast boundary records into stable output records.

All functions are pure: they take parsed upstream models (plus the current
instant where time matters) and return output records. Upstream ordering is
trusted everywhere; nothing here re-sorts.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone
from typing import Optional, Sequence, TypeVar

from .models import (
    ConstructorStanding,
    Driver,
    DriverStanding,
    ErgastCircuit,
    ErgastConstructorStanding,
    ErgastDriver,
    ErgastDriverStanding,
    ErgastFastestLap,
    ErgastRace,
    ErgastResult,
    FastestLap,
    LastRace,
    PodiumEntry,
    Race,
    RaceTableResponse,
    RecentResult,
    Result,
    StandingsResponse,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

RECENT_RESULTS_COUNT = 5
PODIUM_SIZE = 3

# Output key -> ErgastRace attribute, in weekend order
SESSION_FIELDS = (
    ("firstPractice", "first_practice"),
    ("secondPractice", "second_practice"),
    ("thirdPractice", "third_practice"),
    ("sprintQualifying", "sprint_qualifying"),
    ("sprint", "sprint"),
    ("qualifying", "qualifying"),
)


# ─── Coercion ────────────────────────────────────────────────────────────────


def to_int(value: Optional[str]) -> Optional[int]:
    """Parse an integer field. Missing or unparsable values stay None, never 0."""
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug("Non-integer upstream value: %r", value)
        return None


def to_float(value: Optional[str]) -> Optional[float]:
    """Parse a floating-point field. Missing or unparsable values stay None."""
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug("Non-numeric upstream value: %r", value)
        return None


# ─── Selection ───────────────────────────────────────────────────────────────


def top_n(items: Sequence[T], n: int) -> list[T]:
    """First ``n`` entries of an already-ranked list."""
    return list(items[:n])


def tail(items: Sequence[T], n: int = RECENT_RESULTS_COUNT) -> list[T]:
    """Last ``n`` entries (all of them when fewer exist)."""
    if n <= 0:
        return []
    return list(items[-n:])


def race_start(race: ErgastRace) -> Optional[datetime]:
    """Race date at midnight UTC, or None when the date cannot be parsed."""
    try:
        return datetime.combine(date.fromisoformat(race.date), time.min, tzinfo=timezone.utc)
    except ValueError:
        logger.warning("Unparsable race date %r for %s", race.date, race.race_name)
        return None


def as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def is_upcoming(race: ErgastRace, now: datetime) -> bool:
    start = race_start(race)
    return start is not None and start > as_utc(now)


def upcoming_races(races: Sequence[ErgastRace], now: datetime) -> list[ErgastRace]:
    """Races dated strictly after ``now``, in calendar order."""
    return [r for r in races if is_upcoming(r, now)]


def next_race(races: Sequence[ErgastRace], now: datetime) -> Optional[ErgastRace]:
    """First race in calendar order dated strictly after ``now``."""
    return next((r for r in races if is_upcoming(r, now)), None)


# ─── Records ─────────────────────────────────────────────────────────────────


def location(circuit: ErgastCircuit) -> str:
    return f"{circuit.location.locality}, {circuit.location.country}"


def session_times(race: ErgastRace) -> Optional[dict[str, str]]:
    sessions = {}
    for key, attr in SESSION_FIELDS:
        session = getattr(race, attr)
        if session is None:
            continue
        sessions[key] = f"{session.date}T{session.time}" if session.time else session.date
    return sessions or None


def normalize_race(race: ErgastRace, include_sessions: bool = True) -> Race:
    return Race(
        season=race.season,
        round=to_int(race.round),
        name=race.race_name,
        circuit=race.circuit.circuit_name,
        location=location(race.circuit),
        date=race.date,
        time=race.time,
        sessions=session_times(race) if include_sessions else None,
    )


def normalize_driver(driver: ErgastDriver) -> Driver:
    return Driver(
        id=driver.driver_id,
        name=driver.full_name,
        code=driver.code,
        number=driver.permanent_number,
        nationality=driver.nationality,
        date_of_birth=driver.date_of_birth,
        profile_url=driver.url,
    )


def normalize_fastest_lap(lap: Optional[ErgastFastestLap]) -> Optional[FastestLap]:
    if lap is None:
        return None
    speed = lap.average_speed
    return FastestLap(
        rank=to_int(lap.rank),
        lap=to_int(lap.lap),
        time=lap.time.time if lap.time else None,
        avg_speed=to_float(speed.speed) if speed else None,
        avg_speed_units=speed.units if speed else None,
    )


def normalize_result(result: ErgastResult) -> Result:
    finish_time = result.time.time if result.time and result.time.time else None
    return Result(
        position=to_int(result.position),
        driver=result.driver.full_name,
        code=result.driver.code,
        team=result.constructor.name if result.constructor else None,
        laps=to_int(result.laps),
        time=finish_time or result.status,
        status=result.status,
        points=to_float(result.points),
        grid=to_int(result.grid),
        fastest_lap=normalize_fastest_lap(result.fastest_lap),
    )


def normalize_driver_standing(standing: ErgastDriverStanding) -> DriverStanding:
    # A driver who switched teams lists every constructor; the first is the one shown.
    team = standing.constructors[0].name if standing.constructors else None
    return DriverStanding(
        position=to_int(standing.position),
        driver=standing.driver.full_name,
        code=standing.driver.code,
        team=team,
        points=to_float(standing.points),
        wins=to_int(standing.wins),
    )


def normalize_constructor_standing(standing: ErgastConstructorStanding) -> ConstructorStanding:
    return ConstructorStanding(
        position=to_int(standing.position),
        team=standing.constructor.name,
        nationality=standing.constructor.nationality,
        points=to_float(standing.points),
        wins=to_int(standing.wins),
    )


# ─── Endpoint families ───────────────────────────────────────────────────────


def driver_standings(response: StandingsResponse, limit: Optional[int] = None) -> list[DriverStanding]:
    """Driver championship table in upstream order; empty when the season has none."""
    standings_list = response.first_list
    entries = standings_list.driver_standings if standings_list else []
    if limit is not None:
        entries = top_n(entries, limit)
    return [normalize_driver_standing(s) for s in entries]


def constructor_standings(response: StandingsResponse, limit: Optional[int] = None) -> list[ConstructorStanding]:
    standings_list = response.first_list
    entries = standings_list.constructor_standings if standings_list else []
    if limit is not None:
        entries = top_n(entries, limit)
    return [normalize_constructor_standing(s) for s in entries]


def schedule(races: Sequence[ErgastRace]) -> list[Race]:
    return [normalize_race(r) for r in races]


def race_results(race: ErgastRace) -> list[Result]:
    return [normalize_result(r) for r in race.results]


def recent_results(response: RaceTableResponse, count: int = RECENT_RESULTS_COUNT) -> list[RecentResult]:
    """The driver's last ``count`` races of the season, oldest first.

    The per-driver results endpoint returns one result per race, so the first
    result of each race is the driver's own.
    """
    recent = []
    for race in tail(response.races, count):
        own = race.results[0] if race.results else None
        recent.append(
            RecentResult(
                race=race.race_name,
                round=to_int(race.round),
                position=to_int(own.position) if own else None,
                points=to_float(own.points) if own else None,
                team=own.constructor.name if own and own.constructor else None,
            )
        )
    return recent


def podium(race: ErgastRace, size: int = PODIUM_SIZE) -> list[PodiumEntry]:
    return [
        PodiumEntry(
            position=to_int(r.position),
            driver=r.driver.full_name,
            team=r.constructor.name if r.constructor else None,
        )
        for r in top_n(race.results, size)
    ]


def last_race(response: RaceTableResponse) -> Optional[LastRace]:
    """Summary of the most recent race, or None when upstream lists no race."""
    if not response.races:
        return None
    race = response.races[0]
    return LastRace(name=race.race_name, round=to_int(race.round), date=race.date, podium=podium(race))
