"""Request dispatch: lookup, validation, handler invocation, envelope.

The dispatcher owns no mutable state. Each call builds its own
HandlerContext, so concurrent dispatches never share working data.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Protocol

from pydantic import ValidationError as PydanticValidationError

from ..config import Settings
from .clients.ergast import ErgastClient
from .errors import ValidationError
from .models import EntrypointInput
from .normalize import as_utc
from .registry import Entrypoint, EntrypointRegistry

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class HandlerContext:
    """Per-dispatch collaborators handed to an entrypoint handler."""

    client: ErgastClient
    settings: Settings
    now: datetime

    @property
    def fetched_at(self) -> str:
        return as_utc(self.now).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PaymentGate(Protocol):
    """Payment collaborator consulted before priced handlers run.

    Implementations raise PaymentRequiredError (or their own error) to decline.
    """

    async def authorize(self, entrypoint: Entrypoint, params: EntrypointInput) -> None: ...


class RequestDispatcher:
    """Resolves, validates, and runs entrypoints from a frozen registry."""

    def __init__(
        self,
        registry: EntrypointRegistry,
        client: ErgastClient,
        settings: Settings,
        payment_gate: Optional[PaymentGate] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._registry = registry
        self._client = client
        self._settings = settings
        self._payment_gate = payment_gate
        self._clock = clock

    @property
    def registry(self) -> EntrypointRegistry:
        return self._registry

    def validate(self, entrypoint: Entrypoint, raw_input: Any) -> EntrypointInput:
        """Apply the entrypoint's input contract, filling declared defaults."""
        if raw_input is None:
            raw_input = {}
        if not isinstance(raw_input, Mapping):
            raise ValidationError(
                entrypoint.key,
                [{"field": "<input>", "message": "Input should be an object", "type": "model_type"}],
            )
        try:
            return entrypoint.input_model.model_validate(dict(raw_input))
        except PydanticValidationError as exc:
            fields = [
                {
                    "field": ".".join(str(p) for p in err["loc"]) or "<input>",
                    "message": err["msg"],
                    "type": err["type"],
                }
                for err in exc.errors()
            ]
            raise ValidationError(entrypoint.key, fields) from exc

    async def dispatch(self, key: str, raw_input: Optional[Mapping[str, Any]] = None) -> dict:
        """Run entrypoint ``key`` and wrap its result as ``{"output": result}``.

        Soft not-found payloads returned by handlers pass through untouched.
        Validation, registry, payment, and upstream errors propagate.
        """
        entrypoint = self._registry.get(key)
        params = self.validate(entrypoint, raw_input)

        if entrypoint.price > 0 and self._payment_gate is not None:
            await self._payment_gate.authorize(entrypoint, params)

        context = HandlerContext(client=self._client, settings=self._settings, now=self._clock())
        started = time.perf_counter()
        try:
            result = await entrypoint.handler(params, context)
        except Exception as exc:
            logger.warning(
                "Entrypoint %s failed after %.0f ms: %s",
                key,
                (time.perf_counter() - started) * 1000,
                exc,
            )
            raise

        logger.info(
            "Entrypoint %s served (price %d) in %.0f ms",
            key,
            entrypoint.price,
            (time.perf_counter() - started) * 1000,
        )
        return {"output": result}
