"""Persisted key/value store backing core options.

Option files are flat TOML documents of ``key = "value"`` lines.  The
store keeps the parsed :mod:`tomlkit` document around so that comments,
ordering and unrelated keys survive a round trip through
:meth:`ConfigStore.write`.

Only five operations are used by the option manager: :meth:`open`,
:meth:`get_string`, :meth:`set_string`, :meth:`write` and :meth:`close`.
"""

from __future__ import annotations

import logging
from pathlib import Path

import tomlkit
from tomlkit.exceptions import TOMLKitError

from coreopts.errors import StoreClosedError, StoreOpenError

log = logging.getLogger(__name__)


class ConfigStore:
    """A flat TOML key/value document, optionally loaded from disk."""

    def __init__(self, doc: tomlkit.TOMLDocument, source: Path | None = None) -> None:
        self._doc: tomlkit.TOMLDocument | None = doc
        self.source = source

    @classmethod
    def open(cls, path: str | Path | None) -> ConfigStore:
        """Parse the option file at *path*.

        Raises :class:`StoreOpenError` if *path* is empty, missing,
        unreadable, or not valid TOML.
        """
        if path is None or str(path) == "":
            raise StoreOpenError("No store path given")
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise StoreOpenError(
                f"Cannot read option file {path}", context={"path": path}, cause=exc
            ) from exc
        try:
            doc = tomlkit.parse(text)
        except TOMLKitError as exc:
            raise StoreOpenError(
                f"Option file {path} is not valid TOML: {exc}",
                context={"path": path},
                cause=exc,
            ) from exc
        return cls(doc, source=path)

    @classmethod
    def anonymous(cls) -> ConfigStore:
        """Return an empty in-memory store."""
        return cls(tomlkit.document())

    @property
    def closed(self) -> bool:
        return self._doc is None

    def _document(self) -> tomlkit.TOMLDocument:
        if self._doc is None:
            raise StoreClosedError("Store is closed")
        return self._doc

    def get_string(self, key: str) -> str | None:
        """Return the string stored under *key*, or ``None``.

        Non-string values (tables, numbers, booleans) count as absent.
        """
        value = self._document().get(key)
        if isinstance(value, str):
            return str(value)
        return None

    def set_string(self, key: str, value: str) -> None:
        self._document()[key] = value

    def keys(self) -> list[str]:
        return list(self._document().keys())

    def __contains__(self, key: object) -> bool:
        return key in self._document()

    def dumps(self) -> str:
        return tomlkit.dumps(self._document())

    def write(self, path: str | Path | None) -> bool:
        """Serialize the whole document to *path*; ``False`` on failure."""
        text = self.dumps()
        if path is None or str(path) == "":
            log.warning("No option file path configured, nothing written")
            return False
        try:
            Path(path).write_text(text, encoding="utf-8")
        except OSError as exc:
            log.warning("Failed to write option file %s: %s", path, exc)
            return False
        return True

    def close(self) -> None:
        self._doc = None
