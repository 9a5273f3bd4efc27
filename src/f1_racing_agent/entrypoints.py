"""Entrypoint table and handlers.

Every capability the agent sells is one row of ENTRYPOINT_TABLE. Prices come
from the PricingPolicy, so the table carries no amounts. ``initialize()``
turns the table into a frozen EntrypointRegistry; the process entry point
calls it exactly once.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from . import __version__
from .config import AGENT_DESCRIPTION, AGENT_NAME, DATA_SOURCE, Settings, load_settings
from .core import normalize
from .core.clients.ergast import ErgastClient
from .core.dispatcher import HandlerContext, PaymentGate, RequestDispatcher
from .core.models import (
    DriverInput,
    OverviewInput,
    ReportInput,
    ResultsInput,
    ScheduleInput,
    StandingsInput,
    StandingsType,
)
from .core.pricing import PricingPolicy
from .core.registry import Entrypoint, EntrypointRegistry

logger = logging.getLogger(__name__)

OVERVIEW_TOP_N = 3
REPORT_TOP_DRIVERS = 10
REPORT_UPCOMING_RACES = 3


# ─── Free: Overview ──────────────────────────────────────────────────────────


async def overview(params: OverviewInput, ctx: HandlerContext) -> dict:
    season = ctx.settings.latest_complete_season
    driver_data, constructor_data, schedule_data = await asyncio.gather(
        ctx.client.driver_standings(season),
        ctx.client.constructor_standings(season),
        ctx.client.schedule("current"),
    )
    upcoming = normalize.next_race(schedule_data.races, ctx.now)

    return {
        "championshipSeason": season,
        "topDrivers": [s.to_output() for s in normalize.driver_standings(driver_data, limit=OVERVIEW_TOP_N)],
        "topConstructors": [
            s.to_output() for s in normalize.constructor_standings(constructor_data, limit=OVERVIEW_TOP_N)
        ],
        "nextRace": normalize.normalize_race(upcoming, include_sessions=False).to_output() if upcoming else None,
        "fetchedAt": ctx.fetched_at,
        "dataSource": DATA_SOURCE,
    }


# ─── Paid: Driver ────────────────────────────────────────────────────────────


async def driver(params: DriverInput, ctx: HandlerContext) -> dict:
    lookup = await ctx.client.driver(params.driver_id)
    if not lookup.drivers:
        return {"error": "Driver not found", "driverId": params.driver_id}

    # Season results only make sense once the driver is known to exist.
    season = params.season or ctx.settings.latest_complete_season
    results_data = await ctx.client.driver_results(season, params.driver_id)

    return {
        "driver": normalize.normalize_driver(lookup.drivers[0]).to_output(),
        "season": season,
        "seasonResults": {
            "races": len(results_data.races),
            "results": [r.to_output() for r in normalize.recent_results(results_data)],
        },
        "fetchedAt": ctx.fetched_at,
    }


# ─── Paid: Standings ─────────────────────────────────────────────────────────


async def standings(params: StandingsInput, ctx: HandlerContext) -> dict:
    season = params.season or ctx.settings.latest_complete_season
    result: dict = {"season": season, "fetchedAt": ctx.fetched_at}

    fetches = {}
    if params.type in (StandingsType.DRIVERS, StandingsType.BOTH):
        fetches["driverStandings"] = (ctx.client.driver_standings(season), normalize.driver_standings)
    if params.type in (StandingsType.CONSTRUCTORS, StandingsType.BOTH):
        fetches["constructorStandings"] = (ctx.client.constructor_standings(season), normalize.constructor_standings)

    responses = await asyncio.gather(*(fetch for fetch, _ in fetches.values()))
    for (name, (_, shape)), response in zip(fetches.items(), responses):
        result[name] = [s.to_output() for s in shape(response)]
    return result


# ─── Paid: Schedule ──────────────────────────────────────────────────────────


async def schedule(params: ScheduleInput, ctx: HandlerContext) -> dict:
    data = await ctx.client.schedule(params.season)
    races = data.races
    selected = normalize.upcoming_races(races, ctx.now) if params.upcoming else races

    return {
        "season": data.table.season or params.season,
        "totalRaces": len(races),
        "races": [r.to_output() for r in normalize.schedule(selected)],
        "fetchedAt": ctx.fetched_at,
    }


# ─── Paid: Results ───────────────────────────────────────────────────────────


async def results(params: ResultsInput, ctx: HandlerContext) -> dict:
    season = params.season or ctx.settings.latest_complete_season
    data = await ctx.client.race_results(season, params.round)
    if not data.races:
        return {"error": "Race not found", "season": season, "round": params.round}

    race = data.races[0]
    return {
        "race": normalize.normalize_race(race, include_sessions=False).to_output(),
        "results": [r.to_output() for r in normalize.race_results(race)],
        "fetchedAt": ctx.fetched_at,
    }


# ─── Paid: Report ────────────────────────────────────────────────────────────


async def report(params: ReportInput, ctx: HandlerContext) -> dict:
    season = ctx.settings.latest_complete_season
    schedule_data, driver_data, constructor_data, last_race_data = await asyncio.gather(
        ctx.client.schedule("current"),
        ctx.client.driver_standings(season),
        ctx.client.constructor_standings(season),
        ctx.client.race_results(season, "last"),
    )
    upcoming = normalize.top_n(normalize.upcoming_races(schedule_data.races, ctx.now), REPORT_UPCOMING_RACES)
    last = normalize.last_race(last_race_data)

    return {
        "championshipSeason": season,
        "championship": {
            "drivers": [s.to_output() for s in normalize.driver_standings(driver_data, limit=REPORT_TOP_DRIVERS)],
            "constructors": [s.to_output() for s in normalize.constructor_standings(constructor_data)],
        },
        "lastRace": last.to_output() if last else None,
        "upcomingRaces": [normalize.normalize_race(r, include_sessions=False).to_output() for r in upcoming],
        "fetchedAt": ctx.fetched_at,
    }


# ─── Table ───────────────────────────────────────────────────────────────────

ENTRYPOINT_TABLE = [
    {
        "key": "overview",
        "description": "Free overview of F1 season - top 3 drivers and constructors standings, plus next race",
        "input": OverviewInput,
        "handler": overview,
    },
    {
        "key": "driver",
        "description": "Look up a specific F1 driver by ID (e.g., max_verstappen, norris, hamilton)",
        "input": DriverInput,
        "handler": driver,
    },
    {
        "key": "standings",
        "description": "Full driver and constructor standings for specified season",
        "input": StandingsInput,
        "handler": standings,
    },
    {
        "key": "schedule",
        "description": "F1 race schedule with dates, circuits, and session times",
        "input": ScheduleInput,
        "handler": schedule,
    },
    {
        "key": "results",
        "description": "Detailed race results with positions, times, and lap data",
        "input": ResultsInput,
        "handler": results,
    },
    {
        "key": "report",
        "description": "Comprehensive F1 report - standings, upcoming races, and recent results",
        "input": ReportInput,
        "handler": report,
    },
]


def initialize(pricing: Optional[PricingPolicy] = None) -> EntrypointRegistry:
    """Build the frozen registry from ENTRYPOINT_TABLE."""
    pricing = pricing or PricingPolicy()
    registry = EntrypointRegistry()
    for row in ENTRYPOINT_TABLE:
        registry.register(
            Entrypoint(
                key=row["key"],
                description=row["description"],
                input_model=row["input"],
                price=pricing.price_for(row["key"]),
                handler=row["handler"],
            )
        )
    logger.info("Registered %d entrypoints", len(registry))
    return registry.freeze()


def create_dispatcher(
    settings: Optional[Settings] = None,
    registry: Optional[EntrypointRegistry] = None,
    payment_gate: Optional[PaymentGate] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    **kwargs,
) -> RequestDispatcher:
    """Wire settings, client, and registry into a dispatcher."""
    settings = settings or load_settings()
    client = ErgastClient(settings.api_base, timeout=settings.timeout_seconds, transport=transport)
    if registry is None:
        registry = initialize()
    return RequestDispatcher(registry, client, settings, payment_gate=payment_gate, **kwargs)


def build_manifest(registry: EntrypointRegistry, settings: Settings) -> dict:
    """Capability-discovery document: agent identity plus the entrypoint list."""
    endpoints = [f"https://{settings.agent_domain}"] if settings.agent_domain else []
    return registry.manifest(AGENT_NAME, __version__, AGENT_DESCRIPTION, endpoints=endpoints)
