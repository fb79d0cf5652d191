"""Core option manager.

Holds the fixed table of options a core declared, answers the host's
per-frame key lookups, cycles selections, and flushes them back to the
option file.

Usage::

    from coreopts import load_options

    with load_options("snes9x.opt", [("gfx_api", "Graphics API; gl|vulkan")]) as opts:
        opts.advance(0)
        opts.lookup_by_key("gfx_api")   # "vulkan"
        opts.flush()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path

from coreopts.descriptor import CoreOption, iter_variables, parse_variable
from coreopts.errors import ManagerClosedError, StoreOpenError
from coreopts.store import ConfigStore

log = logging.getLogger(__name__)


def _open_store(conf_path: str | Path | None) -> ConfigStore:
    """Open *conf_path*, falling back to an anonymous store."""
    if conf_path:
        try:
            return ConfigStore.open(conf_path)
        except StoreOpenError as exc:
            log.info("Using an empty option store: %s", exc)
    return ConfigStore.anonymous()


class CoreOptionManager:
    """Fixed-size, insertion-ordered table of core options.

    Instances are built with :meth:`from_variables`; the table never grows
    or shrinks afterwards.  ``updated`` is set by every mutation and cleared
    only by :meth:`lookup_by_key`, which is how a host polls for changes.
    """

    def __init__(
        self,
        store: ConfigStore,
        conf_path: str | Path | None,
        options: Iterable[CoreOption],
    ) -> None:
        self._store: ConfigStore | None = store
        self.conf_path = Path(conf_path) if conf_path else None
        self._options: tuple[CoreOption, ...] = tuple(options)
        self._index: dict[str, int] = {}
        for position, option in enumerate(self._options):
            # Duplicate keys: first declaration wins.
            self._index.setdefault(option.key, position)
        self.updated = False

    @classmethod
    def from_variables(
        cls,
        conf_path: str | Path | None,
        variables: Iterable[tuple[str | None, str | None]],
    ) -> CoreOptionManager:
        """Build a manager from raw ``(key, descriptor)`` pairs.

        Raises :class:`~coreopts.errors.DescriptorError` on the first
        malformed descriptor.  The store is closed and nothing is returned
        on failure.
        """
        store = _open_store(conf_path)
        try:
            pairs = list(iter_variables(variables))
            options = [parse_variable(key, desc, store) for key, desc in pairs]
        except Exception:
            store.close()
            raise
        log.debug("Loaded %d core options (store: %s)", len(options), conf_path or "<anonymous>")
        return cls(store, conf_path, options)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._store is None

    @property
    def store(self) -> ConfigStore:
        if self._store is None:
            raise ManagerClosedError("Option manager is closed")
        return self._store

    def close(self) -> None:
        """Release the option store.  Safe to call more than once."""
        if self._store is not None:
            self._store.close()
            self._store = None

    def __enter__(self) -> CoreOptionManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _option(self, idx: int) -> CoreOption:
        if self._store is None:
            raise ManagerClosedError("Option manager is closed")
        if not 0 <= idx < len(self._options):
            raise IndexError(f"Option index {idx} out of range (size {len(self._options)})")
        return self._options[idx]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def size(self) -> int:
        return len(self._options)

    def __len__(self) -> int:
        return len(self._options)

    @property
    def options(self) -> tuple[CoreOption, ...]:
        """Copies of the options in table order; changing them has no effect."""
        return tuple(replace(option) for option in self._options)

    def description(self, idx: int) -> str:
        return self._option(idx).description

    def current_value(self, idx: int) -> str:
        return self._option(idx).value

    def values(self, idx: int) -> tuple[str, ...]:
        return self._option(idx).values

    def index_of(self, key: str) -> int | None:
        """Return the table position of *key*, or ``None``."""
        return self._index.get(key)

    def lookup_by_key(self, key: str) -> str | None:
        """Return the current value for *key*, or ``None`` if unknown.

        Clears the ``updated`` flag whether or not the key exists.
        """
        if self._store is None:
            raise ManagerClosedError("Option manager is closed")
        self.updated = False
        idx = self._index.get(key)
        if idx is None:
            return None
        return self._option(idx).value

    def is_updated(self) -> bool:
        return self.updated

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_selection(self, idx: int, value_index: int) -> None:
        """Select choice *value_index* (wrapped) for option *idx*."""
        self._option(idx).select(value_index)
        self.updated = True

    def advance(self, idx: int) -> None:
        self._option(idx).step(1)
        self.updated = True

    def retreat(self, idx: int) -> None:
        self._option(idx).step(-1)
        self.updated = True

    def reset_to_default(self, idx: int) -> None:
        self._option(idx).select(0)
        self.updated = True

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def flush(self) -> bool:
        """Write every option's current value to the option file.

        Returns whether the file write succeeded.  The in-memory store keeps
        the new values even when it did not.
        """
        store = self.store
        for option in self._options:
            store.set_string(option.key, option.value)
        return store.write(self.conf_path)


def load_options(
    conf_path: str | Path | None,
    variables: Iterable[tuple[str | None, str | None]],
) -> CoreOptionManager:
    """Shorthand for :meth:`CoreOptionManager.from_variables`."""
    return CoreOptionManager.from_variables(conf_path, variables)


def option_count(manager: CoreOptionManager | None) -> int:
    """Number of options in *manager*; ``0`` when there is none."""
    if manager is None:
        return 0
    return manager.size()
