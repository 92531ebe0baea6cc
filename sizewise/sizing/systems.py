"""
System registry: loads the measurement-system definitions from YAML at
startup, validates them, and exposes a read-only query API.

The registry is a module-level singleton; call get_registry() to obtain it.
The definitions are loaded and validated once at import time. Nothing writes
to the registry after startup.

Each system names how a caller's value is interpreted (its ``kind``) and how
many decimals derived values are reported with (its ``precision``). Regional
systems are additional numeric columns of the reference table and are
matched to it by ``id``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent / "data"
_SYSTEMS_FILE = "systems.yaml"


class SystemKind(str, Enum):
    """How a system's values relate to the reference table."""

    CIRCUMFERENCE = "circumference"
    DIAMETER = "diameter"
    NUMERIC = "numeric"
    LETTER = "letter"
    REGIONAL = "regional"


@dataclass(frozen=True)
class SizeSystem:
    id: str
    label: str
    kind: SystemKind
    precision: int
    aliases: tuple[str, ...] = ()
    example: str = ""
    notes: str = ""


class SystemRegistry:
    """
    Immutable registry of supported measurement systems.

    Instantiate directly to use a custom data directory (e.g. in tests);
    otherwise use get_registry() for the module singleton.
    """

    def __init__(self, data_dir: Path = _DATA_DIR) -> None:
        self._data_dir = data_dir
        self.systems: dict[str, SizeSystem] = {}
        self._names: dict[str, str] = {}

        self._load_systems()
        self._validate()
        logger.debug("Loaded %d measurement systems from %s", len(self.systems), data_dir)

    # ── Loading ────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> dict:
        path = self._data_dir / filename
        with open(path) as f:
            try:
                return yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ValueError(f"Failed to parse {path}: {exc}") from exc

    def _load_systems(self) -> None:
        data = self._load_yaml(_SYSTEMS_FILE)
        if not isinstance(data, dict) or not isinstance(data.get("systems"), list):
            raise ValueError(f"{_SYSTEMS_FILE} must contain a 'systems' list")
        for entry in data["systems"]:
            system_id = str(entry["id"]).lower()
            if system_id in self.systems:
                raise ValueError(f"duplicate system id: {system_id!r}")
            self.systems[system_id] = SizeSystem(
                id=system_id,
                label=entry["label"],
                kind=SystemKind(entry["kind"]),
                precision=int(entry.get("precision", 0)),
                aliases=tuple(str(a).lower() for a in entry.get("aliases", [])),
                example=str(entry.get("example", "")),
                notes=entry.get("notes", "").strip(),
            )

    # ── Validation ─────────────────────────────────────────────────────────────

    def _validate(self) -> None:
        """
        Run at startup. Raises ValueError listing all problems found.
        """
        errors: list[str] = []

        for system in self.systems.values():
            for name in (system.id, *system.aliases):
                owner = self._names.get(name)
                if owner is not None and owner != system.id:
                    errors.append(
                        f"name {name!r} of system {system.id!r} already used by {owner!r}"
                    )
                else:
                    self._names[name] = system.id
            if system.precision < 0:
                errors.append(
                    f"system {system.id!r} has negative precision {system.precision}"
                )

        # Every core kind must be served by exactly one system
        for kind in SystemKind:
            if kind is SystemKind.REGIONAL:
                continue
            count = len(self.by_kind(kind))
            if count != 1:
                errors.append(f"expected exactly one {kind.value!r} system, found {count}")

        if errors:
            raise ValueError(
                "System registry validation failed:\n"
                + "\n".join(f"  • {e}" for e in errors)
            )

    # ── Query API ──────────────────────────────────────────────────────────────

    def get(self, system_id: str) -> SizeSystem:
        """Return the system registered under *system_id*.

        Raises
        ------
        KeyError
            If *system_id* is not registered.
        """
        if system_id not in self.systems:
            raise KeyError(f"Unknown system: {system_id!r}")
        return self.systems[system_id]

    def find(self, system_id: str) -> SizeSystem | None:
        return self.systems.get(system_id)

    def resolve(self, name: str) -> SizeSystem:
        """Look up a system by id or alias, ignoring case and surrounding space.

        Raises
        ------
        KeyError
            If *name* matches no id or alias; the message lists accepted ids.
        """
        system_id = self._names.get(name.strip().lower())
        if system_id is None:
            raise KeyError(
                f"Unknown system: {name!r}. Accepted: {', '.join(self.list_ids())}"
            )
        return self.systems[system_id]

    def by_kind(self, kind: SystemKind) -> list[SizeSystem]:
        """Systems of *kind*, in definition order."""
        return [s for s in self.systems.values() if s.kind is kind]

    def list_ids(self) -> list[str]:
        """Return system ids in definition order."""
        return list(self.systems)


# ── Module-level singleton ─────────────────────────────────────────────────────
#
# Initialized eagerly at import time so there is no lazy-init race condition
# in concurrent contexts.

_registry: SystemRegistry = SystemRegistry()


def get_registry() -> SystemRegistry:
    """Return the module-level registry singleton."""
    return _registry
