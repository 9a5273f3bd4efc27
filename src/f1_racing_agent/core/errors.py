"""Error taxonomy for dispatch, registry, and upstream failures.

Soft not-found results are not errors: handlers return them as ordinary
output payloads. Everything here is raised and propagates to the dispatch
boundary unchanged.
"""

from __future__ import annotations

from typing import Optional


class F1AgentError(Exception):
    """Base class for all agent errors."""

    is_client_error = False


class ValidationError(F1AgentError):
    """Input did not match the entrypoint's contract."""

    is_client_error = True

    def __init__(self, key: str, fields: list[dict]):
        self.key = key
        self.fields = fields
        names = ", ".join(f["field"] for f in fields) or "<input>"
        super().__init__(f"Invalid input for entrypoint '{key}': {names}")


class NotRegisteredError(F1AgentError):
    """No entrypoint is registered under the requested key."""

    is_client_error = True

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown entrypoint: '{key}'")


class DuplicateKeyError(F1AgentError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Entrypoint '{key}' is already registered")


class RegistryFrozenError(F1AgentError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Registry is frozen; cannot register '{key}'")


class PaymentRequiredError(F1AgentError):
    """Raised by a payment collaborator that declines a priced call."""

    is_client_error = True

    def __init__(self, key: str, price: int):
        self.key = key
        self.price = price
        super().__init__(f"Payment of {price} required for entrypoint '{key}'")


class UpstreamError(F1AgentError):
    """The statistics API answered with a non-success status."""

    def __init__(self, status_code: int, url: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        super().__init__(f"F1 API error: {status_code}" + (f" ({url})" if url else ""))


class NetworkError(F1AgentError):
    """The statistics API could not be reached at all."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        super().__init__(f"Network failure fetching {url}" + (f": {reason}" if reason else ""))


class UpstreamShapeError(F1AgentError):
    """The statistics API returned a payload we cannot interpret."""

    def __init__(self, path: str, detail: str = ""):
        self.path = path
        self.detail = detail
        super().__init__(f"Unexpected payload shape from {path}" + (f": {detail}" if detail else ""))
