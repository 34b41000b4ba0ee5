from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from cards.exceptions import InvalidMatchError, InvalidPairError, InvalidResultError


def generate_id():
    import uuid
    return str(uuid.uuid4())[:8]


class Winner(str, Enum):
    TEAM_A = "teamA"
    TEAM_B = "teamB"


class MatchStatus(str, Enum):
    PENDING = "pending"
    RECORDED = "recorded"


@dataclass(frozen=True)
class PlayerRef:
    """Opaque player reference handed over by the identity provider."""
    id: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Pair:
    id: str
    name: str
    players: Tuple[PlayerRef, PlayerRef]
    label: Optional[str] = None  # A | K | Q | J

    def __post_init__(self):
        players = tuple(self.players)
        if len(players) != 2:
            raise InvalidPairError(f"Pair {self.id} must have exactly two players, got {len(players)}")
        if players[0].id == players[1].id:
            raise InvalidPairError(f"Pair {self.id} lists player {players[0].id} twice")
        object.__setattr__(self, "players", players)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "label": self.label,
            "players": [p.to_dict() for p in self.players],
        }


@dataclass(frozen=True)
class MatchResult:
    score_a: int
    score_b: int
    is_golden_point: bool = False

    def __post_init__(self):
        for score in (self.score_a, self.score_b):
            # bool is an int subclass but never a valid score
            if isinstance(score, bool) or not isinstance(score, int):
                raise InvalidResultError(f"Score must be an integer, got {score!r}")
            if score < 0:
                raise InvalidResultError(f"Score must be non-negative, got {score}")

    @property
    def winner(self) -> Winner:
        # Equal scores fall through to team B.
        return Winner.TEAM_A if self.score_a > self.score_b else Winner.TEAM_B

    @property
    def is_tie(self) -> bool:
        return self.score_a == self.score_b

    def to_dict(self) -> dict:
        return {
            "score_a": self.score_a,
            "score_b": self.score_b,
            "is_golden_point": self.is_golden_point,
            "winner": self.winner.value,
        }


@dataclass(frozen=True)
class Match:
    id: str
    round: int
    court: int
    team_a: Pair
    team_b: Pair
    result: Optional[MatchResult] = None
    status: MatchStatus = MatchStatus.PENDING

    def __post_init__(self):
        if self.team_a.id == self.team_b.id:
            raise InvalidMatchError(f"Match {self.id} pits pair {self.team_a.id} against itself")
        expected = MatchStatus.PENDING if self.result is None else MatchStatus.RECORDED
        if self.status != expected:
            raise InvalidMatchError(
                f"Match {self.id} has status {self.status.value} but result is "
                f"{'missing' if self.result is None else 'present'}"
            )

    @property
    def has_result(self) -> bool:
        return self.status == MatchStatus.RECORDED

    @property
    def winner_pair(self) -> Optional[Pair]:
        if self.result is None:
            return None
        return self.team_a if self.result.winner == Winner.TEAM_A else self.team_b

    @property
    def loser_pair(self) -> Optional[Pair]:
        if self.result is None:
            return None
        return self.team_b if self.result.winner == Winner.TEAM_A else self.team_a

    def involves(self, pair_id: str) -> bool:
        return pair_id in (self.team_a.id, self.team_b.id)

    def with_result(self, result: MatchResult) -> "Match":
        return replace(self, result=result, status=MatchStatus.RECORDED)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "round": self.round,
            "court": self.court,
            "team_a": self.team_a.to_dict(),
            "team_b": self.team_b.to_dict(),
            "status": self.status.value,
            "result": self.result.to_dict() if self.result else None,
        }


@dataclass
class Standing:
    pair_id: str
    pair_name: str
    wins: int = 0
    points_for: int = 0
    points_against: int = 0
    diff: int = 0

    def to_dict(self) -> dict:
        return {
            "pair_id": self.pair_id,
            "pair_name": self.pair_name,
            "wins": self.wins,
            "points_for": self.points_for,
            "points_against": self.points_against,
            "diff": self.diff,
        }
