from __future__ import annotations

from enum import Enum


class Sex(str, Enum):
    MALE = "M"
    FEMALE = "H"

    @classmethod
    def normalize(cls, value: str | None) -> str | None:
        """Map the spellings found in farm records ("Macho", "hembra", ...) to M/H."""
        if value is None:
            return None
        cleaned = value.strip().upper()
        if cleaned in ("M", "MACHO", "MALE"):
            return cls.MALE.value
        if cleaned in ("H", "HEMBRA", "F", "FEMALE"):
            return cls.FEMALE.value
        return None
