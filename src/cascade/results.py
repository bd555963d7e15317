"""Tagged stage results for the response cascade."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Matched:
    response: str
    stage: str


@dataclass(frozen=True)
class NoMatch:
    stage: str = ""


NO_MATCH = NoMatch()

StageResult = Matched | NoMatch
