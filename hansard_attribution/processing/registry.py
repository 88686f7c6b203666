"""Indexed, read-only snapshot of canonical legislators."""

from typing import Any, Iterable, Iterator, Mapping, Optional

import structlog

from hansard_attribution.models import Legislator

from .normalizer import normalize, normalize_constituency

logger = structlog.get_logger(__name__)


class RegistryError(Exception):
    """Base error for registry precondition violations."""


class DuplicateIdError(RegistryError):
    """Two legislators in a snapshot share the same id."""

    def __init__(self, legislator_id: str):
        super().__init__(f"Duplicate legislator id in registry snapshot: {legislator_id!r}")
        self.legislator_id = legislator_id


class LegislatorNotFoundError(RegistryError):
    """An operation referenced legislator ids the registry does not hold."""

    def __init__(self, legislator_ids: Iterable[str]):
        self.legislator_ids = sorted(set(legislator_ids))
        super().__init__(f"Unknown legislator id(s): {', '.join(self.legislator_ids)}")


class LegislatorRegistry:
    """Legislators indexed by id, normalized name and normalized constituency.

    Built once per parse and never mutated. Name keys include the reversed
    "surname first" order of every canonical name. When two legislators share
    a key the first one in snapshot order keeps it.
    """

    def __init__(self, legislators: Iterable[Legislator | Mapping[str, Any]]):
        self._by_id: dict[str, Legislator] = {}
        self._by_name: dict[str, str] = {}
        self._by_constituency: dict[str, str] = {}
        self._normalized_names: dict[str, str] = {}

        for item in legislators:
            legislator = item if isinstance(item, Legislator) else Legislator.model_validate(item)
            if legislator.id in self._by_id:
                raise DuplicateIdError(legislator.id)
            self._by_id[legislator.id] = legislator
            self._index(legislator)

        logger.debug(
            "registry_built",
            legislators=len(self._by_id),
            name_keys=len(self._by_name),
            constituency_keys=len(self._by_constituency),
        )

    def _index(self, legislator: Legislator) -> None:
        normalized_name = normalize(legislator.canonical_name)
        self._normalized_names[legislator.id] = normalized_name

        for key in _name_keys(normalized_name):
            existing = self._by_name.setdefault(key, legislator.id)
            if existing != legislator.id:
                logger.warning("registry_name_collision", key=key, kept=existing, ignored=legislator.id)

        constituency_key = normalize_constituency(legislator.constituency)
        if constituency_key:
            existing = self._by_constituency.setdefault(constituency_key, legislator.id)
            if existing != legislator.id:
                logger.warning(
                    "registry_constituency_collision",
                    constituency=constituency_key,
                    kept=existing,
                    ignored=legislator.id,
                )

    def get(self, legislator_id: str) -> Optional[Legislator]:
        """Get a legislator by id."""
        return self._by_id.get(legislator_id)

    def find_by_name(self, normalized_name: str) -> Optional[Legislator]:
        """Exact lookup by an already normalized name."""
        legislator_id = self._by_name.get(normalized_name)
        return self._by_id[legislator_id] if legislator_id else None

    def find_by_constituency(self, normalized_constituency: str) -> Optional[Legislator]:
        """Exact lookup by an already normalized constituency."""
        legislator_id = self._by_constituency.get(normalized_constituency)
        return self._by_id[legislator_id] if legislator_id else None

    def find_by_canonical_name(self, canonical_name: str) -> Optional[Legislator]:
        """Lookup by the official name exactly as stored."""
        for legislator in self._by_id.values():
            if legislator.canonical_name == canonical_name:
                return legislator
        return None

    def normalized_name(self, legislator_id: str) -> str:
        """Normalized canonical name of a registered legislator."""
        return self._normalized_names[legislator_id]

    def missing_ids(self, legislator_ids: Iterable[str]) -> list[str]:
        """Ids from ``legislator_ids`` that are not registered."""
        return [i for i in legislator_ids if i not in self._by_id]

    def __contains__(self, legislator_id: object) -> bool:
        return legislator_id in self._by_id

    def __iter__(self) -> Iterator[Legislator]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)


def _name_keys(normalized_name: str) -> list[str]:
    if not normalized_name:
        return []
    keys = [normalized_name]
    parts = normalized_name.split(" ")
    if len(parts) > 1:
        keys.append(" ".join([parts[-1], *parts[:-1]]))
    return keys
