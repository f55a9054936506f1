"""Data models for NAR race-meeting schedules."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class Venue(Enum):
    """NAR racecourse, valued by its Japanese display name."""

    OBIHIRO = "帯広"
    MONBETSU = "門別"
    SAPPORO = "札幌"
    MORIOKA = "盛岡"
    MIZUSAWA = "水沢"
    URAWA = "浦和"
    FUNABASHI = "船橋"
    OI = "大井"
    KAWASAKI = "川崎"
    KANAZAWA = "金沢"
    KASAMATSU = "笠松"
    NAGOYA = "名古屋"
    CHUKYO = "中京"
    SONODA = "園田"
    HIMEJI = "姫路"
    KOCHI = "高知"
    SAGA = "佐賀"

    @property
    def japanese(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> Optional["Venue"]:
        """Resolve a venue from the name shown in the schedule table.

        Args:
            name: Display name, already stripped of newlines and whitespace.

        Returns:
            Matching venue, or None if the name is not a known venue.
        """
        alias = _VENUE_ALIASES.get(name)
        if alias is not None:
            return alias
        try:
            return cls(name)
        except ValueError:
            return None


# Banei racing at Obihiro is listed as "帯広ば" on some pages
_VENUE_ALIASES = {
    "帯広ば": Venue.OBIHIRO,
}


class Region(Enum):
    """Regional grouping the schedule table uses for its first column."""

    BANEI = "ばんえい"
    HOKKAIDO = "ホッカイドウ"
    IWATE = "岩手"
    MINAMI_KANTO = "南関東"
    KANAZAWA = "金沢"
    TOKAI = "東海"
    HYOGO = "兵庫"
    KOCHI = "高知"
    KYUSHU = "九州"

    @property
    def japanese(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> Optional["Region"]:
        try:
            return cls(name)
        except ValueError:
            return None


class RaceStatus(Enum):
    """Kind of meeting held on a day, valued by its Japanese label."""

    STANDARD = "通常開催"
    NIGHTER = "ナイター競馬"
    DART_GRADED = "ダート交流重賞競走"
    SUBSTITUTE = "別の日に代替開催"
    CLOSED = "開催なし"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_glyph(cls, glyph: str) -> "RaceStatus":
        """Classify the marker found in a day cell.

        Unknown markers and empty cells are CLOSED.
        """
        return _STATUS_GLYPHS.get(glyph, cls.CLOSED)


_STATUS_GLYPHS = {
    "●": RaceStatus.STANDARD,
    "☆": RaceStatus.NIGHTER,
    "Ｄ": RaceStatus.DART_GRADED,
    "△": RaceStatus.SUBSTITUTE,
}


@dataclass(frozen=True)
class ScheduleEntry:
    """A single venue's status on a single day."""

    venue: Venue
    date: date
    status: RaceStatus
    region: Optional[Region] = field(default=None)

    def __post_init__(self) -> None:
        if not isinstance(self.venue, Venue):
            raise ValueError(f"Venue must be a Venue, got {self.venue!r}")
