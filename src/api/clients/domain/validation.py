"""Format validators for Moroccan business identifiers.

Pure functions with no I/O. Each validator normalizes its input the same
way the identifier is stored (surrounding whitespace removed, RC upper
cased) before checking the format.
"""

from __future__ import annotations

import re

_ICE = re.compile(r"[0-9]{15}")
_CNSS = re.compile(r"[0-9]{8,10}")
_ASCII_DIGITS = frozenset("0123456789")


def normalize_identifier(value: str | None) -> str | None:
    """Return the trimmed identifier, or None when it is absent or blank.

    Blank identifiers do not participate in uniqueness checks.
    """
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def normalize_rc(value: str | None) -> str | None:
    """Trim and upper-case a commercial register number."""
    normalized = normalize_identifier(value)
    return normalized.upper() if normalized is not None else None


def is_valid_ice(value: str) -> bool:
    """Identifiant Commun de l'Entreprise: exactly 15 digits."""
    normalized = value.strip()
    return _ICE.fullmatch(normalized) is not None


def is_valid_rc(value: str) -> bool:
    """Registre de Commerce: 4 to 20 characters, at least one digit."""
    normalized = value.strip().upper()
    if not 4 <= len(normalized) <= 20:
        return False
    return any(ch in _ASCII_DIGITS for ch in normalized)


def is_valid_vat(value: str) -> bool:
    """Identifiant Fiscal: 8 to 15 characters with at least 8 digits."""
    normalized = value.strip()
    if not 8 <= len(normalized) <= 15:
        return False
    return sum(ch in _ASCII_DIGITS for ch in normalized) >= 8


def is_valid_cnss(value: str) -> bool:
    """Social security affiliation number: 8 to 10 digits."""
    normalized = value.strip()
    return _CNSS.fullmatch(normalized) is not None
