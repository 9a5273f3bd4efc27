"""Entrypoint definitions and the registry that holds them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterator, Optional

from .errors import DuplicateKeyError, NotRegisteredError, RegistryFrozenError
from .models import EntrypointInput

if TYPE_CHECKING:
    from .dispatcher import HandlerContext

logger = logging.getLogger(__name__)

Handler = Callable[[Any, "HandlerContext"], Awaitable[dict]]


@dataclass(frozen=True)
class Entrypoint:
    """A named, priced, schema-validated capability."""

    key: str
    description: str
    input_model: type[EntrypointInput]
    price: int
    handler: Handler

    def __post_init__(self):
        if not self.key:
            raise ValueError("Entrypoint key must be non-empty")
        if isinstance(self.price, bool) or not isinstance(self.price, int) or self.price < 0:
            raise ValueError(f"Entrypoint '{self.key}' price must be a non-negative integer, got {self.price!r}")

    @property
    def is_free(self) -> bool:
        return self.price == 0

    def input_schema(self) -> dict:
        return self.input_model.model_json_schema(by_alias=True)

    def describe(self) -> dict:
        return {
            "key": self.key,
            "description": self.description,
            "price": self.price,
            "free": self.is_free,
            "inputSchema": self.input_schema(),
        }


class EntrypointRegistry:
    """Ordered, unique-keyed collection of entrypoints.

    Built once at startup and then frozen; lookups are read-only.
    """

    def __init__(self):
        self._entrypoints: dict[str, Entrypoint] = {}
        self._frozen = False

    def register(self, entrypoint: Entrypoint) -> Entrypoint:
        if self._frozen:
            raise RegistryFrozenError(entrypoint.key)
        if entrypoint.key in self._entrypoints:
            raise DuplicateKeyError(entrypoint.key)
        self._entrypoints[entrypoint.key] = entrypoint
        logger.debug("Registered entrypoint %s (price %d)", entrypoint.key, entrypoint.price)
        return entrypoint

    def get(self, key: str) -> Entrypoint:
        try:
            return self._entrypoints[key]
        except KeyError:
            raise NotRegisteredError(key) from None

    def list(self) -> list[Entrypoint]:
        return list(self._entrypoints.values())

    def freeze(self) -> "EntrypointRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, key: object) -> bool:
        return key in self._entrypoints

    def __iter__(self) -> Iterator[Entrypoint]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._entrypoints)

    def manifest(
        self,
        name: str,
        version: str,
        description: str,
        endpoints: Optional[list[str]] = None,
    ) -> dict:
        """Capability-discovery document for the transport layer to publish."""
        return {
            "name": name,
            "version": version,
            "description": description,
            "endpoints": endpoints or [],
            "entrypoints": [ep.describe() for ep in self._entrypoints.values()],
        }
