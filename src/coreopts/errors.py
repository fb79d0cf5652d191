"""Error taxonomy for coreopts.

Every failure raised by the library derives from :class:`OptionsError`,
which keeps a small JSON-friendly ``context`` mapping next to the message
so the CLI can report it with ``--json``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _normalize_context_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


class OptionsError(Exception):
    """Base error for option parsing, persistence and configuration."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = {k: _normalize_context_value(v) for k, v in (context or {}).items()}
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class DescriptorError(OptionsError):
    """A raw option descriptor could not be parsed."""

    def __init__(self, message: str, key: str, descriptor: str) -> None:
        super().__init__(message, context={"key": key, "descriptor": descriptor})
        self.key = key
        self.descriptor = descriptor


class StoreOpenError(OptionsError):
    """The persisted key/value store could not be opened."""


class StoreClosedError(OptionsError):
    """A store was used after it was closed."""


class ManagerClosedError(OptionsError):
    """An option manager was used after it was closed."""


class ConfigError(OptionsError):
    """``coreopts.toml`` is malformed or names an unknown core."""
