from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Literal

from .catalog.types import HunterTarget

HunterFilter = Literal["all", "found", "notFound", "incomplete"]
HUNTER_FILTERS: tuple[HunterFilter, ...] = ("all", "found", "notFound", "incomplete")


@dataclass(frozen=True, slots=True)
class HunterEntry:
    name: str
    kills: int
    target: int
    optional: bool = False
    display: str = ""
    link: str = ""

    @property
    def found(self) -> bool:
        return self.kills > 0

    @property
    def complete(self) -> bool:
        return self.kills >= self.target


@dataclass(frozen=True, slots=True)
class HunterSummary:
    killed: int
    found: int
    total: int

    @property
    def complete(self) -> bool:
        return self.killed == self.total


def hunter_entries(targets: Iterable[HunterTarget], kills: Mapping[str, int]) -> tuple[HunterEntry, ...]:
    return tuple(
        HunterEntry(
            name=target.name,
            kills=int(kills.get(target.name, 0)),
            target=int(target.target),
            optional=bool(target.optional),
            display=target.display,
            link=target.link,
        )
        for target in targets
    )


def required(entries: Iterable[HunterEntry]) -> tuple[HunterEntry, ...]:
    return tuple(entry for entry in entries if not entry.optional)


def hunter_summary(entries: Iterable[HunterEntry]) -> HunterSummary:
    req = required(entries)
    return HunterSummary(
        killed=sum(1 for entry in req if entry.complete),
        found=sum(1 for entry in req if entry.found),
        total=len(req),
    )


def filter_hunter(entries: Iterable[HunterEntry], mode: HunterFilter = "all") -> tuple[HunterEntry, ...]:
    if mode == "all":
        return tuple(entries)
    if mode == "found":
        return tuple(entry for entry in entries if entry.found)
    if mode == "notFound":
        return tuple(entry for entry in entries if not entry.found)
    if mode == "incomplete":
        return tuple(entry for entry in entries if entry.found and not entry.complete)
    raise ValueError(f"unknown hunter filter {mode!r}; expected one of {', '.join(HUNTER_FILTERS)}")
