# polyclinic/core/id_generator.py
from typing import Iterable, Optional

PATIENT_ID_PREFIX = "P"
DOCTOR_ID_PREFIX = "D"


def parse_suffix(identifier: str) -> Optional[int]:
    """
    Numeric part of a prefixed id such as ``"P12"`` or ``"D3   "``.

    Returns None when what follows the one-letter prefix is not an
    unsigned integer.
    """
    suffix = identifier[1:].rstrip()
    if not suffix.isdigit():
        return None
    return int(suffix)


def next_id(prefix: str, existing_ids: Iterable[str]) -> Optional[str]:
    """
    Next sequential identifier after the highest one in ``existing_ids``.

    >>> next_id("P", [])
    'P1'
    >>> next_id("D", ["D1", "D7 ", "D3"])
    'D8'

    Returns None if any existing id has a non-numeric suffix; callers must
    then abort the create without persisting anything.
    """
    highest = 0
    for identifier in existing_ids:
        value = parse_suffix(identifier)
        if value is None:
            return None
        highest = max(highest, value)
    return f"{prefix}{highest + 1}"


__all__ = ["PATIENT_ID_PREFIX", "DOCTOR_ID_PREFIX", "parse_suffix", "next_id"]
