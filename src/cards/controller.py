"""Round progression for a Cards tournament.

The controller owns the authoritative match list. Every read hands out a
fresh list; matches and pairs are immutable, so callers cannot reach into
controller state.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence

from cards.exceptions import (
    DuplicateResultError,
    InvalidResultError,
    MatchNotFoundError,
    TournamentStateError,
)
from cards.functions import calculate_standings, generate_round2, seed_round1
from cards.models import Match, MatchResult, Pair, Standing

logger = logging.getLogger(__name__)

LAST_ROUND = 2


class TiePolicy(str, Enum):
    TEAM_B = "team_b"  # equal scores go to team B
    REJECT = "reject"


class TournamentPhase(str, Enum):
    ROUND1_ACTIVE = "round1_active"
    ROUND2_ACTIVE = "round2_active"
    COMPLETE = "complete"


class TournamentController:
    """Holds the match list of one Cards tournament and advances its rounds.

    Args:
        pairs: The four pairs in seed order (A, K, Q, J).
        tie_policy: What to do with equal scores.
        allow_overwrite: Whether a recorded result may be replaced while its
            round is still active. When False a second write raises
            DuplicateResultError.
    """

    def __init__(
        self,
        pairs: Sequence[Pair],
        tie_policy: TiePolicy = TiePolicy.TEAM_B,
        allow_overwrite: bool = False,
    ):
        self._pairs: List[Pair] = list(pairs)
        self.tie_policy = tie_policy
        self.allow_overwrite = allow_overwrite
        self._matches: List[Match] = seed_round1(self._pairs)
        self._current_round = 1

        logger.info(
            "Seeded round 1: "
            + ", ".join(f"court {m.court} {m.team_a.name} vs {m.team_b.name}" for m in self._matches)
        )

    @property
    def pairs(self) -> List[Pair]:
        return list(self._pairs)

    @property
    def matches(self) -> List[Match]:
        return list(self._matches)

    @property
    def current_round(self) -> int:
        return self._current_round

    @property
    def standings(self) -> List[Standing]:
        return calculate_standings(self._matches, self._pairs)

    @property
    def phase(self) -> TournamentPhase:
        if self._current_round == 1:
            return TournamentPhase.ROUND1_ACTIVE
        if all(m.has_result for m in self.round_matches(LAST_ROUND)):
            return TournamentPhase.COMPLETE
        return TournamentPhase.ROUND2_ACTIVE

    @property
    def is_complete(self) -> bool:
        return self.phase == TournamentPhase.COMPLETE

    def round_matches(self, round_number: int) -> List[Match]:
        return [m for m in self._matches if m.round == round_number]

    def match_for_court(self, round_number: int, court: int) -> Optional[Match]:
        return next(
            (m for m in self._matches if m.round == round_number and m.court == court),
            None,
        )

    def pending_matches(self) -> List[Match]:
        return [m for m in self._matches if not m.has_result]

    def get_match(self, match_id: str) -> Match:
        return self._matches[self._index_of(match_id)]

    def record_result(self, match_id: str, result: MatchResult) -> List[Standing]:
        """Attach a result to a match of the active round.

        Recomputes the standings and generates the next round once the
        active round is fully recorded.

        Returns:
            The updated standings.

        Raises:
            MatchNotFoundError: Unknown match id.
            TournamentStateError: The match does not belong to the active round.
            DuplicateResultError: The match already has a result and
                overwriting is disabled.
            InvalidResultError: Tied score under TiePolicy.REJECT.
        """
        index = self._index_of(match_id)
        match = self._matches[index]

        if match.round != self._current_round:
            raise TournamentStateError(
                f"Match {match_id} belongs to round {match.round}, "
                f"active round is {self._current_round}"
            )

        if match.has_result:
            if not self.allow_overwrite:
                raise DuplicateResultError(f"Result for match {match_id} already recorded")
            logger.warning(
                f"Overwriting result of match {match_id}: "
                f"{match.result.score_a}-{match.result.score_b} -> {result.score_a}-{result.score_b}"
            )

        if result.is_tie:
            if self.tie_policy == TiePolicy.REJECT:
                raise InvalidResultError(
                    f"Tied score {result.score_a}-{result.score_b} for match {match_id}"
                )
            logger.warning(
                f"Tied score {result.score_a}-{result.score_b} in match {match_id}, "
                f"awarding the win to team B ({match.team_b.name})"
            )

        self._matches[index] = match.with_result(result)
        logger.debug(
            f"Recorded round {match.round} court {match.court}: "
            f"{match.team_a.name} {result.score_a} - {result.score_b} {match.team_b.name}"
        )

        standings = calculate_standings(self._matches, self._pairs)
        self._check_advance()
        return standings

    def _index_of(self, match_id: str) -> int:
        for i, m in enumerate(self._matches):
            if m.id == match_id:
                return i
        raise MatchNotFoundError(f"Match {match_id} not found")

    def _check_advance(self):
        active = self.round_matches(self._current_round)
        if not all(m.has_result for m in active):
            return

        if self._current_round == 1:
            next_matches = generate_round2(active)
            if not next_matches:
                logger.warning("Round 1 complete but round 2 could not be generated")
                return
            self._matches.extend(next_matches)
            self._current_round = 2
            logger.info(
                "Advanced to round 2: "
                + ", ".join(f"court {m.court} {m.team_a.name} vs {m.team_b.name}" for m in next_matches)
            )
        else:
            # No rule exists past round 2.
            logger.info(f"Round {self._current_round} complete, tournament finished")

    def to_dict(self) -> dict:
        return {
            "current_round": self._current_round,
            "phase": self.phase.value,
            "is_complete": self.is_complete,
            "pairs": [p.to_dict() for p in self._pairs],
            "matches": [m.to_dict() for m in self._matches],
            "standings": [s.to_dict() for s in self.standings],
        }
