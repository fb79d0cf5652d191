"""Project configuration loader for coreopts.

Reads ``coreopts.toml`` from the project root.  The file declares one or
more cores, each with the option file its selections persist to and the
raw option descriptors it exposes::

    [cores.snes9x]
    options_file = "snes9x.opt"

    [cores.snes9x.variables]
    snes9x_gfx_api = "Graphics API; gl|vulkan|d3d11"
    snes9x_frameskip = "Frameskip; 0|1|2|3"

Usage::

    from coreopts.config import load_config

    cfg = load_config(core="snes9x")
    with cfg.open_manager() as opts:
        ...
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from coreopts.descriptor import Variable
from coreopts.errors import ConfigError
from coreopts.manager import CoreOptionManager

CONFIG_NAME = "coreopts.toml"


@dataclass
class ProjectConfig:
    """Parsed settings for one core."""

    # Root directory (where coreopts.toml lives)
    root: Path

    core_name: str = ""

    # None selects the anonymous in-memory store
    options_path: Path | None = None

    # Declaration order is table order
    variables: list[Variable] = field(default_factory=list)

    all_cores: list[str] = field(default_factory=list)

    def open_manager(self) -> CoreOptionManager:
        """Build the option manager for this core."""
        return CoreOptionManager.from_variables(self.options_path, self.variables)


def _resolve(root: Path, rel: str | None) -> Path | None:
    """Resolve a path relative to project root; empty means no path."""
    if not rel:
        return None
    p = Path(rel)
    if p.is_absolute():
        return p
    return root / p


def _find_root(start: Path | None = None) -> Path:
    """Walk up from *start* (or cwd) to find coreopts.toml."""
    if start is not None:
        return start
    candidate = Path.cwd().resolve()
    while candidate != candidate.parent:
        if (candidate / CONFIG_NAME).exists():
            return candidate
        candidate = candidate.parent
    raise FileNotFoundError(
        f"Could not find {CONFIG_NAME} in any parent of the current directory. "
        f"Run coreopts from within a project that contains {CONFIG_NAME}."
    )


def _read_variables(core: str, raw: object) -> list[Variable]:
    if not isinstance(raw, dict):
        raise ConfigError(f"[cores.{core}.variables] must be a table", context={"core": core})
    variables = []
    for key, descriptor in raw.items():
        if not isinstance(descriptor, str):
            raise ConfigError(
                f"Descriptor for '{key}' in core '{core}' must be a string",
                context={"core": core, "key": key},
            )
        variables.append(Variable(key, descriptor))
    return variables


def load_config(root: Path | None = None, core: str | None = None) -> ProjectConfig:
    """Load coreopts.toml.

    Args:
        root: Project root directory.  Auto-detected if ``None``.
        core: Name of the core to load (key under ``[cores]``).
              Defaults to the first core defined in the file.
    """
    root = _find_root(root)
    toml_path = root / CONFIG_NAME
    if not toml_path.exists():
        raise FileNotFoundError(f"Config not found: {toml_path}")

    with open(toml_path, "rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{toml_path} is not valid TOML: {exc}", cause=exc) from exc

    cores = raw.get("cores")
    if not cores or not isinstance(cores, dict):
        raise ConfigError(f"{CONFIG_NAME} has no [cores] section")
    all_core_names = list(cores.keys())

    if core is None:
        core = all_core_names[0]
    if core not in cores:
        raise ConfigError(
            f"Core '{core}' not found in {CONFIG_NAME}.  Available cores: {all_core_names}",
            context={"core": core, "available": all_core_names},
        )
    section = cores[core]
    if not isinstance(section, dict):
        raise ConfigError(f"[cores.{core}] must be a table", context={"core": core})

    return ProjectConfig(
        root=root,
        core_name=core,
        options_path=_resolve(root, section.get("options_file", f"{core}.opt")),
        variables=_read_variables(core, section.get("variables", {})),
        all_cores=all_core_names,
    )
