"""
Borough-Block-Lot identifier model.

Normalizes user-supplied BBLs to the canonical 10-digit form and derives the
unpadded block/lot segments some datasets expect.
"""

import re
from dataclasses import dataclass

from building_health.errors import InvalidBBLError

BBL_LENGTH = 10

_NON_DIGITS = re.compile(r"\D")


def normalize_bbl(raw: str) -> str:
    """
    Normalize a raw BBL string.

    Strips every non-digit character, keeps the first 10 digits when there
    are at least 10, otherwise left-pads with zeros to 10.

    Args:
        raw: User-supplied BBL (e.g. '1-000-10001')

    Returns:
        10-digit BBL, or '' for empty input
    """
    if not raw:
        return ""
    clean = _NON_DIGITS.sub("", raw)
    if len(clean) >= BBL_LENGTH:
        return clean[:BBL_LENGTH]
    return clean.zfill(BBL_LENGTH)


@dataclass(frozen=True)
class BBL:
    """A normalized borough-block-lot identifier."""

    padded: str

    @property
    def borough(self) -> str:
        return self.padded[0]

    @property
    def block(self) -> str:
        """Block without leading zeros."""
        return self.padded[1:6].lstrip("0")

    @property
    def lot(self) -> str:
        """Lot without leading zeros."""
        return self.padded[6:].lstrip("0")

    @property
    def block_int(self) -> int:
        return int(self.padded[1:6])

    @property
    def lot_int(self) -> int:
        return int(self.padded[6:])

    def __str__(self) -> str:
        return self.padded


def parse_bbl(raw: str) -> BBL:
    """
    Parse a raw BBL into a BBL model.

    Raises:
        InvalidBBLError: If the input has no digits or the normalized value
            is not exactly 10 digits
    """
    padded = normalize_bbl(raw)
    if len(padded) != BBL_LENGTH or not _NON_DIGITS.sub("", raw or ""):
        raise InvalidBBLError(f"Invalid BBL: {raw!r}")
    return BBL(padded)
