"""Static campus name to source spreadsheet id configuration, one map per level."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .common import load_yaml
from .levels import Level


class IdentityMapError(ValueError):
    """Raised when the campus configuration cannot be turned into identity maps."""


def _clean_identifier(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class LevelIdentities:
    """Ordered canonical campus name -> source id entries for a single level."""

    level: Level
    entries: tuple[tuple[str, str], ...]
    _by_identifier: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        index: dict[str, str] = {}
        for name, identifier in self.entries:
            if identifier:
                # later entries replace earlier ones sharing the same id
                index[identifier] = name
        object.__setattr__(self, "_by_identifier", MappingProxyType(index))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.entries]

    def resolve(self, identifier: object) -> str | None:
        key = _clean_identifier(identifier)
        if not key:
            return None
        return self._by_identifier.get(key)

    def duplicate_identifiers(self) -> dict[str, list[str]]:
        seen: dict[str, list[str]] = {}
        for name, identifier in self.entries:
            if identifier:
                seen.setdefault(identifier, []).append(name)
        return {k: v for k, v in seen.items() if len(v) > 1}

    def unsourced_names(self) -> list[str]:
        return [name for name, identifier in self.entries if not identifier]


@dataclass(frozen=True)
class CampusIdentityMap:
    """Per-level identity lookup, built once and treated as read-only config."""

    levels: Mapping[Level, LevelIdentities]

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> CampusIdentityMap:
        """Build the identity map from a parsed `campuses.yml` payload.

        Args:
            data (Mapping[str, object]): Level code to an ordered mapping of
                canonical campus name to source spreadsheet id.

        Returns:
            CampusIdentityMap: Maps for every level; levels absent from `data`
                are empty.

        Raises:
            IdentityMapError: Unknown level code or a non-mapping payload.
        """
        if not isinstance(data, Mapping):
            raise IdentityMapError(
                f"Campus map must be a mapping of level codes, got {type(data).__name__}"
            )

        levels: dict[Level, LevelIdentities] = {
            level: LevelIdentities(level=level, entries=()) for level in Level
        }
        for code, campuses in data.items():
            try:
                level = Level.parse(str(code))
            except ValueError as exc:
                raise IdentityMapError(str(exc)) from exc
            if level is None:
                raise IdentityMapError(f"Empty level code in campus map: {code!r}")
            if campuses is None:
                campuses = {}
            if not isinstance(campuses, Mapping):
                raise IdentityMapError(
                    f"Campuses for {level.value} must be a mapping of name to id"
                )
            entries = tuple(
                (str(name).strip(), _clean_identifier(identifier))
                for name, identifier in campuses.items()
            )
            levels[level] = LevelIdentities(level=level, entries=entries)

        return cls(levels=MappingProxyType(levels))

    @classmethod
    def from_yaml(cls, path: Path) -> CampusIdentityMap:
        return cls.from_mapping(load_yaml(path))

    def for_level(self, level: Level) -> LevelIdentities:
        return self.levels[level]

    def names(self, level: Level) -> list[str]:
        return self.levels[level].names

    def resolve(self, level: Level, identifier: object) -> str | None:
        """Return the canonical campus name for `identifier`, or None if unresolved."""
        return self.levels[level].resolve(identifier)

    def duplicate_identifiers(self, level: Level) -> dict[str, list[str]]:
        return self.levels[level].duplicate_identifiers()
