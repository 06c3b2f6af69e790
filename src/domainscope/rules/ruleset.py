"""Parsed public suffix ruleset."""
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator
import logging

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "//"
WILDCARD_PREFIX = "*."
EXCEPTION_PREFIX = "!"


class RuleKind(str, Enum):
    """Rule kind enumeration."""
    NORMAL = "normal"
    WILDCARD = "wildcard"
    EXCEPTION = "exception"


@dataclass(frozen=True)
class RuleEntry:
    """One ruleset line, keyed by its text without the kind prefix."""
    text: str
    kind: RuleKind


def classify_line(line: str) -> RuleEntry:
    """
    Classify a rule line by its prefix.

    Examples:
        - co.uk -> RuleEntry("co.uk", NORMAL)
        - *.ck -> RuleEntry("ck", WILDCARD)
        - !www.ck -> RuleEntry("www.ck", EXCEPTION)
    """
    if line.startswith(WILDCARD_PREFIX):
        return RuleEntry(line[len(WILDCARD_PREFIX):], RuleKind.WILDCARD)
    if line.startswith(EXCEPTION_PREFIX):
        return RuleEntry(line[len(EXCEPTION_PREFIX):], RuleKind.EXCEPTION)
    return RuleEntry(line, RuleKind.NORMAL)


class RuleSet(Mapping):
    """
    Read-only mapping from lookup key to RuleEntry.

    Built once and shared between threads; nothing mutates it after
    construction.
    """

    def __init__(self, entries: Dict[str, RuleEntry]):
        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def parse(cls, text: str) -> "RuleSet":
        """
        Parse ruleset text.

        Comment lines (``//``) and empty lines are skipped; any other line,
        minus its line terminator, is a rule. Entries with an empty key are
        dropped; a repeated key replaces the earlier entry.
        """
        entries: Dict[str, RuleEntry] = {}
        for raw in text.split("\n"):
            line = raw.rstrip("\r")
            if not line or line.startswith(COMMENT_PREFIX):
                continue

            entry = classify_line(line)
            if not entry.text:
                continue
            entries[entry.text] = entry

        logger.debug(f"Parsed {len(entries)} suffix rules")
        return cls(entries)

    def __getitem__(self, key: str) -> RuleEntry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RuleSet({len(self._entries)} rules)"


def parse_rules(text: str) -> RuleSet:
    """Parse ruleset text into a RuleSet."""
    return RuleSet.parse(text)
