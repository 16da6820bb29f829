"""
Wanted MID list for OSP message filtering.
"""

import logging
import re
from typing import Iterable, List

logger = logging.getLogger(__name__)

# Maximum number of MIDs in the wanted list
WHITELIST_CAPACITY = 100

# MIDs needed to generate RINEX files
RINEX_MIDS = (2, 6, 7, 56, 8, 11, 12, 15, 28, 50, 64, 75)

ALL_KEYWORD = "ALL"
RINEX_KEYWORD = "RINEX"
RINEX_PREFIX = RINEX_KEYWORD + ","

_MID_DELIMITERS = re.compile(r'[,;.:]')
_MID_DIGITS = re.compile(r'[0-9]+')


class WhitelistError(ValueError):
    """Wanted MID list cannot be built from the given value."""


class MIDWhitelist:
    """
    Bounded list of wanted MIDs, or accept-all.

    Duplicates are kept. Additions beyond capacity are dropped with a
    warning.
    """

    def __init__(self, mids: Iterable[int] = (), accept_all: bool = False,
                 capacity: int = WHITELIST_CAPACITY):
        self.accept_all = accept_all
        self.capacity = capacity
        self._mids: List[int] = []
        self.extend(mids)

    @classmethod
    def all(cls) -> 'MIDWhitelist':
        """Whitelist accepting every MID."""
        return cls(accept_all=True)

    @property
    def mids(self) -> List[int]:
        """MIDs in insertion order."""
        return list(self._mids)

    def extend(self, mids: Iterable[int]) -> None:
        """
        Append MIDs until capacity is reached.

        Args:
            mids: MID values (0-255)
        """
        dropped = []
        for mid in mids:
            if not 0 <= mid <= 0xFF:
                raise WhitelistError(f"MID out of range 0-255: {mid}")
            if len(self._mids) < self.capacity:
                self._mids.append(mid)
            else:
                dropped.append(mid)

        if dropped:
            logger.warning(
                f"Wanted MID list full ({self.capacity}), ignoring: "
                + " ".join(str(m) for m in dropped)
            )

    def is_wanted(self, mid: int) -> bool:
        """Check if a MID passes the whitelist."""
        return self.accept_all or mid in self._mids

    def describe(self) -> str:
        """Text used in the startup log line."""
        if self.accept_all:
            return ALL_KEYWORD
        return " ".join(str(m) for m in self._mids)

    def __len__(self) -> int:
        return len(self._mids)

    def __repr__(self) -> str:
        if self.accept_all:
            return "MIDWhitelist(accept_all=True)"
        return f"MIDWhitelist({self._mids})"


def parse_mid_list(text: str) -> List[int]:
    """
    Parse MIDs separated by any of ``, ; . :``.

    Empty items are skipped.

    Raises:
        WhitelistError: If an item is not a decimal integer
    """
    mids = []
    for item in _MID_DELIMITERS.split(text):
        item = item.strip()
        if not item:
            continue
        if not _MID_DIGITS.fullmatch(item):
            raise WhitelistError(f"Invalid MID {item!r} in {text!r}")
        mids.append(int(item))
    return mids


def build_whitelist(value: str) -> MIDWhitelist:
    """
    Build the wanted MID list from the ``--wmsg`` option value.

    - ``ALL``: every MID is wanted
    - ``RINEX``: the MIDs needed for RINEX generation
    - ``RINEX,<list>``: RINEX MIDs plus the listed ones
    - ``<list>``: only the listed MIDs

    Raises:
        WhitelistError: On invalid MIDs, or a list naming no MID
    """
    if value == ALL_KEYWORD:
        return MIDWhitelist.all()
    if value == RINEX_KEYWORD:
        return MIDWhitelist(RINEX_MIDS)
    if value.startswith(RINEX_PREFIX):
        whitelist = MIDWhitelist(RINEX_MIDS)
        whitelist.extend(parse_mid_list(value[len(RINEX_PREFIX):]))
        return whitelist

    mids = parse_mid_list(value)
    if not mids:
        raise WhitelistError(f"No MID given in {value!r}")
    return MIDWhitelist(mids)
