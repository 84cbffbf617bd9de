"""Neighborhood directory built from the NYC Neighborhood Tabulation Area GeoJSON.

The directory is loaded once by the application startup sequence and is
read-only afterwards. Lookups are exact on the normalized (trimmed,
lower-cased) neighborhood name; `search` is the looser substring match.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Iterator

from breathewatch.errors import InvalidArgument, NotFound, UpstreamUnavailable
from breathewatch.models.location import LocationRecord, normalize_name

logger = logging.getLogger(__name__)

# Property names vary between NTA dataset vintages (2010 vs 2020 releases).
NEIGHBORHOOD_KEYS = ("ntaname", "nta_name", "neighborhood", "name")
BOROUGH_KEYS = ("boro_name", "boroname", "borough")


def _first_property(properties: dict[str, Any], keys: tuple[str, ...]) -> str:
    for key in keys:
        value = properties.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


class LocationDirectory:
    def __init__(self, records: Iterable[LocationRecord] = ()):
        self._by_key: dict[str, LocationRecord] = {}
        for record in records:
            self._add(record)

    @classmethod
    def load(cls, path: str | Path) -> "LocationDirectory":
        """Load the directory from a GeoJSON FeatureCollection file.

        Raises UpstreamUnavailable if the file is missing, unreadable or
        malformed, or if it yields no usable neighborhoods.
        """
        path = Path(path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise UpstreamUnavailable(f"Cannot read neighborhood data {path}: {e}") from e

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            raise UpstreamUnavailable(f"Neighborhood data {path} is not valid JSON: {e}") from e

        features = document.get("features") if isinstance(document, dict) else None
        if not isinstance(features, list):
            raise UpstreamUnavailable(f"Neighborhood data {path} has no feature list")

        directory = cls.from_features(features)
        logger.info("Loaded %d neighborhoods from %s", len(directory), path)
        return directory

    @classmethod
    def from_features(cls, features: list[Any]) -> "LocationDirectory":
        """Build the directory from parsed GeoJSON features.

        Features without a neighborhood or borough name are skipped with a warning.
        """
        directory = cls()
        for index, feature in enumerate(features):
            properties = feature.get("properties") if isinstance(feature, dict) else None
            if not isinstance(properties, dict):
                logger.warning("Skipping feature %d: no properties", index)
                continue
            neighborhood = _first_property(properties, NEIGHBORHOOD_KEYS)
            borough = _first_property(properties, BOROUGH_KEYS)
            if not neighborhood or not borough:
                logger.warning("Skipping feature %d: missing neighborhood or borough name", index)
                continue
            directory._add(LocationRecord(neighborhood=neighborhood, borough=borough))

        if not directory:
            raise UpstreamUnavailable("Neighborhood data contains no usable features")
        return directory

    def _add(self, record: LocationRecord) -> None:
        key = record.key
        existing = self._by_key.get(key)
        if existing is not None:
            # First occurrence wins
            if existing != record:
                logger.warning(
                    "Duplicate neighborhood %r (%s); keeping %s",
                    record.neighborhood, record.borough, existing.borough,
                )
            return
        self._by_key[key] = record

    def resolve(self, raw_name: object) -> LocationRecord:
        """Translate a user-supplied neighborhood name into its canonical record."""
        if not isinstance(raw_name, str) or not raw_name.strip():
            raise InvalidArgument("Neighborhood must be a non-empty string.")
        name = raw_name.strip()
        record = self._by_key.get(normalize_name(name))
        if record is None:
            raise NotFound(f"Neighborhood '{name}' not recognized.")
        return record

    def resolve_within(self, raw_name: object, borough: str | None = None) -> LocationRecord:
        """Resolve a name and, if a borough is given, require the record to be in it."""
        record = self.resolve(raw_name)
        if borough and normalize_name(borough) != normalize_name(record.borough):
            raise InvalidArgument(
                f"{record.neighborhood} is in {record.borough}, not {borough.strip()}."
            )
        return record

    def search(
        self, fragment: str, borough: str | None = None, limit: int | None = None
    ) -> list[LocationRecord]:
        """Case-insensitive partial match on neighborhood name, in load order."""
        if not isinstance(fragment, str) or not fragment.strip():
            raise InvalidArgument("Search text must be a non-empty string.")
        needle = normalize_name(fragment)
        borough_key = normalize_name(borough) if borough else None

        matches = []
        for key, record in self._by_key.items():
            if needle not in key:
                continue
            if borough_key and normalize_name(record.borough) != borough_key:
                continue
            matches.append(record)
            if limit is not None and len(matches) >= limit:
                break
        return matches

    def boroughs(self) -> list[str]:
        return sorted({r.borough for r in self._by_key.values()})

    def neighborhoods(self, borough: str | None = None) -> list[LocationRecord]:
        records = self._by_key.values()
        if borough:
            borough_key = normalize_name(borough)
            records = [r for r in records if normalize_name(r.borough) == borough_key]
        return sorted(records, key=lambda r: (r.borough, r.neighborhood))

    def __len__(self) -> int:
        return len(self._by_key)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._by_key

    def __iter__(self) -> Iterator[LocationRecord]:
        return iter(self._by_key.values())
