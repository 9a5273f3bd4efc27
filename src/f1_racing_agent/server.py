"""F1 Racing Agent MCP server.

FastMCP shell over the entrypoint dispatcher: one read-only tool per
entrypoint plus the capability manifest as a resource. Payment settlement is
handled in front of this server; tools here dispatch with no payment gate.
Run: f1-racing-agent
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from mcp.server.fastmcp import Context, FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import ToolAnnotations

from .config import AGENT_DESCRIPTION, Settings, load_settings
from .core.dispatcher import RequestDispatcher
from .core.errors import F1AgentError
from .core.registry import EntrypointRegistry
from .entrypoints import build_manifest, create_dispatcher, initialize

logger = logging.getLogger(__name__)

MANIFEST_URI = "agent://manifest"

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=True)


@dataclass
class AgentState:
    settings: Settings
    registry: EntrypointRegistry
    dispatcher: RequestDispatcher


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[AgentState]:
    """Load settings and build the registry once per process."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    settings = load_settings()
    registry = initialize()
    logger.info("F1 agent ready: %d entrypoints against %s", len(registry), settings.api_base)
    yield AgentState(settings=settings, registry=registry, dispatcher=create_dispatcher(settings, registry))


mcp = FastMCP(
    "F1 Racing Agent",
    instructions=AGENT_DESCRIPTION,
    lifespan=lifespan,
)


def _args(**kwargs) -> dict:
    """Drop unset tool arguments so entrypoint defaults apply."""
    return {k: v for k, v in kwargs.items() if v is not None}


async def _dispatch(ctx: Context, key: str, raw_input: dict) -> dict:
    state: AgentState = ctx.request_context.lifespan_context
    try:
        envelope = await state.dispatcher.dispatch(key, raw_input)
    except F1AgentError as exc:
        kind = "Invalid request" if exc.is_client_error else "Upstream failure"
        raise ToolError(f"{kind}: {exc}") from exc
    return envelope["output"]


# ─── Capability manifest ─────────────────────────────────────────────────────


def manifest_document(state: AgentState) -> str:
    return json.dumps(build_manifest(state.registry, state.settings), indent=2)


@mcp.resource(MANIFEST_URI, mime_type="application/json")
def agent_manifest() -> str:
    """Agent name, description, endpoints, and priced entrypoints."""
    return manifest_document(mcp.get_context().request_context.lifespan_context)


# ─── Tools ───────────────────────────────────────────────────────────────────


@mcp.tool(annotations=READ_ONLY)
async def f1_overview(ctx: Context) -> dict:
    """Free overview of the F1 season — top 3 drivers and constructors, plus the next race."""
    return await _dispatch(ctx, "overview", {})


@mcp.tool(annotations=READ_ONLY)
async def f1_driver(driver_id: str, ctx: Context, season: Optional[str] = None) -> dict:
    """Look up an F1 driver and their last five races of a season. Price: 1000.

    Args:
        driver_id: Driver ID (e.g., 'max_verstappen', 'norris', 'hamilton', 'leclerc').
        season: 4-digit year or 'current'. Defaults to the latest complete season.
    """
    return await _dispatch(ctx, "driver", _args(driverId=driver_id, season=season))


@mcp.tool(annotations=READ_ONLY)
async def f1_standings(ctx: Context, season: Optional[str] = None, type: str = "both") -> dict:
    """Full driver and constructor championship standings. Price: 2000.

    Args:
        season: 4-digit year or 'current'. Defaults to the latest complete season.
        type: 'drivers', 'constructors', or 'both'. Default 'both'.
    """
    return await _dispatch(ctx, "standings", _args(season=season, type=type))


@mcp.tool(annotations=READ_ONLY)
async def f1_schedule(ctx: Context, season: str = "current", upcoming: bool = False) -> dict:
    """Race calendar with dates, circuits, and session times. Price: 2000.

    Args:
        season: 4-digit year or 'current'. Default 'current'.
        upcoming: Only races that have not started yet. Default False.
    """
    return await _dispatch(ctx, "schedule", _args(season=season, upcoming=upcoming))


@mcp.tool(annotations=READ_ONLY)
async def f1_results(ctx: Context, season: Optional[str] = None, round: str = "last") -> dict:
    """Detailed race results — positions, times, grid, fastest laps. Price: 3000.

    Args:
        season: 4-digit year or 'current'. Defaults to the latest complete season.
        round: Round number or 'last'. Default 'last'.
    """
    return await _dispatch(ctx, "results", _args(season=season, round=round))


@mcp.tool(annotations=READ_ONLY)
async def f1_report(ctx: Context) -> dict:
    """Comprehensive report — championship tables, last race podium, upcoming races. Price: 5000."""
    return await _dispatch(ctx, "report", {})


def main():
    """Entry point for the CLI command."""
    mcp.run()


if __name__ == "__main__":
    main()
