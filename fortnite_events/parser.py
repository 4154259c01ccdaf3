# fortnite_events/parser.py

import re
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Type, Union

from .exceptions import NormalizationError, StructuralMismatchError, UnregisteredLabelError
from .models import Match, SessionStats

Number = Union[int, float]

NAME = "name"
VALUE = "value"

_INTEGER_RE = re.compile(r"-?[0-9]+")
_NUMBER_RE = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")
_LEADING_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


# --- Raw value parsing ---

def _parse_int(raw: str) -> int:
    text = raw.strip()
    if not _INTEGER_RE.fullmatch(text):
        raise ValueError("not an integer")
    return int(text)


def _parse_number(raw: str) -> Number:
    """Whole numbers stay int, e.g. '100' -> 100, '1.5' -> 1.5."""
    text = raw.strip()
    if not _NUMBER_RE.fullmatch(text):
        raise ValueError("not a number")
    if "." in text:
        return float(text)
    return int(text)


def _parse_leading_int(raw: str) -> int:
    """Base-10 integer prefix, e.g. '12th' -> 12."""
    match = _LEADING_INTEGER_RE.match(raw.strip())
    if not match:
        raise ValueError("no leading integer")
    return int(match.group(0))


def _without_prefix(raw: str, prefix: str) -> str:
    text = raw.strip()
    if text.startswith(prefix):
        text = text[len(prefix):]
    return text


def _without_commas(raw: str) -> str:
    return raw.replace(",", "")


def parse_rank(raw: str) -> int:
    """'#12' -> 12"""
    return _parse_int(_without_prefix(raw, "#"))


def parse_earnings(raw: str) -> Number:
    """'$1,234' -> 1234"""
    return _parse_number(_without_commas(_without_prefix(raw, "$")))


def parse_pr_points(raw: str) -> Number:
    """'1,234' -> 1234"""
    return _parse_number(_without_commas(raw))


def parse_kd(raw: str) -> Number:
    """'x1.23' -> 1.23"""
    return _parse_number(_without_prefix(raw, "x"))


# --- Normalizer tables ---

class SessionStatLabel(str, Enum):
    """Stat labels shown in a session panel header."""

    RANK = "Rank"
    EARNINGS = "Earnings"
    PR_POINTS = "PR Points"
    ELIMINATIONS = "Eliminations"
    KD = "K/D"
    POINTS_EARNED = "Points Earned"
    AVG_KILLS = "Avg. Kills"
    AVG_PLACEMENT = "Avg. Placement"
    AVG_POINTS = "Avg. Points"


class MatchStatLabel(str, Enum):
    """Stat labels shown in a match row."""

    ELIMINATIONS = "Eliminations"
    PLACED = "Placed"


@dataclass(frozen=True)
class StatNormalizer:
    """Target field of a record plus the function that parses its raw text."""

    field: str
    parse: Callable[[str], Number]

    def apply(self, label: str, raw: Optional[str]) -> Number:
        if raw is None:
            raise NormalizationError(label, raw, "no text content")
        try:
            return self.parse(raw)
        except ValueError as exc:
            raise NormalizationError(label, raw, str(exc)) from exc


SESSION_STAT_NORMALIZERS: Dict[SessionStatLabel, StatNormalizer] = {
    SessionStatLabel.RANK: StatNormalizer("rank", parse_rank),
    SessionStatLabel.EARNINGS: StatNormalizer("earnings", parse_earnings),
    SessionStatLabel.PR_POINTS: StatNormalizer("pr_points", parse_pr_points),
    SessionStatLabel.ELIMINATIONS: StatNormalizer("eliminations", _parse_int),
    SessionStatLabel.KD: StatNormalizer("kd", parse_kd),
    SessionStatLabel.POINTS_EARNED: StatNormalizer("points_earned", _parse_number),
    SessionStatLabel.AVG_KILLS: StatNormalizer("avg_kills", _parse_number),
    SessionStatLabel.AVG_PLACEMENT: StatNormalizer("avg_placement", _parse_number),
    SessionStatLabel.AVG_POINTS: StatNormalizer("avg_points", _parse_number),
}

MATCH_STAT_NORMALIZERS: Dict[MatchStatLabel, StatNormalizer] = {
    MatchStatLabel.ELIMINATIONS: StatNormalizer("eliminations", _parse_int),
    MatchStatLabel.PLACED: StatNormalizer("placed", _parse_leading_int),
}


@dataclass(frozen=True)
class StatTable:
    """
    A label vocabulary bound to the record type it fills.

    Session headers and match rows use separate tables; a label is only
    valid in the table that registers it.
    """

    name: str
    labels: Type[Enum]
    normalizers: Mapping[Any, StatNormalizer]
    record_type: type

    def lookup(self, label: str) -> StatNormalizer:
        try:
            member = self.labels(label)
        except ValueError:
            raise UnregisteredLabelError(label, self.name) from None
        return self.normalizers[member]

    def normalize(self, label: str, raw: str) -> Number:
        label = label.strip()
        return self.lookup(label).apply(label, raw)

    def build(self, values: Dict[str, Any]):
        missing = [f.name for f in fields(self.record_type) if f.name not in values]
        if missing:
            raise StructuralMismatchError(
                f"{self.name} stats missing fields: {', '.join(missing)}"
            )
        return self.record_type(**values)


SESSION_STATS = StatTable("session", SessionStatLabel, SESSION_STAT_NORMALIZERS, SessionStats)
MATCH_STATS = StatTable("match", MatchStatLabel, MATCH_STAT_NORMALIZERS, Match)


def normalize_session_stat(label: str, raw: str) -> Number:
    """Normalize one session stat, e.g. ('Rank', '#12') -> 12."""
    return SESSION_STATS.normalize(label, raw)


def normalize_match_stat(label: str, raw: str) -> Number:
    """Normalize one match stat, e.g. ('Placed', '3') -> 3."""
    return MATCH_STATS.normalize(label, raw)


# --- Label/value reduction ---

class LabelValueReducer:
    """
    Fold an alternating sequence of stat-name / stat-value elements into a record.

    The sequence must strictly alternate name, value, name, value... with
    every label registered in ``table`` and none repeated. Any deviation
    raises StructuralMismatchError. All labels are checked before the first
    normalizer runs, so a rejected sequence fills no fields.
    """

    def __init__(self, name_selector: str, value_selector: str, table: StatTable):
        self.name_selector = name_selector
        self.value_selector = value_selector
        self.table = table

    @property
    def selector(self) -> str:
        """Union selector that yields names and values in document order."""
        return f"{self.name_selector}, {self.value_selector}"

    def _pair(self, items: Iterable[Tuple[str, Optional[str]]]) -> List[Tuple[str, StatNormalizer, Optional[str]]]:
        pairs = []
        seen = set()
        current_label: Optional[str] = None
        normalizer: Optional[StatNormalizer] = None

        for kind, text in items:
            if kind == NAME:
                if current_label is not None:
                    raise StructuralMismatchError(
                        f"Label {current_label!r} is followed by label {text!r} instead of a value"
                    )
                current_label = (text or "").strip()
                normalizer = self.table.lookup(current_label)
                if current_label in seen:
                    raise StructuralMismatchError(
                        f"Label {current_label!r} appears twice in one {self.table.name} block"
                    )
                seen.add(current_label)
            elif kind == VALUE:
                if current_label is None:
                    raise StructuralMismatchError(f"Value {text!r} has no preceding label")
                pairs.append((current_label, normalizer, text))
                current_label = None
                normalizer = None
            else:
                raise StructuralMismatchError(f"Element {text!r} is neither a stat name nor a value")

        if current_label is not None:
            raise StructuralMismatchError(f"Label {current_label!r} has no value")
        return pairs

    def accumulate(self, items: Iterable[Tuple[str, Optional[str]]]) -> Dict[str, Number]:
        """Return only the fields named in ``items``, keyed by record attribute."""
        values: Dict[str, Number] = {}
        for label, normalizer, raw in self._pair(items):
            values[normalizer.field] = normalizer.apply(label, raw)
        return values

    def reduce(self, items: Iterable[Tuple[str, Optional[str]]], **extra: Any):
        """Build a complete record; ``extra`` supplies fields outside the pairs."""
        values: Dict[str, Any] = self.accumulate(items)
        values.update(extra)
        return self.table.build(values)

    async def read(self, queries, container) -> List[Tuple[str, Optional[str]]]:
        """Collect (kind, text) items under ``container`` in document order."""
        items = []
        for element in await queries.qsa(self.selector, container):
            if await queries.matches(element, self.name_selector):
                kind = NAME
            elif await queries.matches(element, self.value_selector):
                kind = VALUE
            else:
                kind = None
            items.append((kind, await queries.text(element)))
        return items

    async def reduce_elements(self, queries, container, **extra: Any):
        return self.reduce(await self.read(queries, container), **extra)
