"""Neighborhood location types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LocationRecord:
    neighborhood: str  # canonical NTA name, as published
    borough: str

    @property
    def key(self) -> str:
        return normalize_name(self.neighborhood)


def normalize_name(name: str) -> str:
    """Directory key for a neighborhood name: trimmed and lower-cased."""
    return name.strip().lower()
