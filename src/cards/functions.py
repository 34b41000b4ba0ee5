import logging
from typing import Dict, List, Optional, Sequence, Tuple

from cards.exceptions import InvalidPairError, UnknownPairError
from cards.models import Match, Pair, PlayerRef, Standing, Winner, generate_id

logger = logging.getLogger(__name__)

# Seed order: A vs K on court 1, Q vs J on court 2
CARD_LABELS = ("A", "K", "Q", "J")
CARD_NAMES = {
    "A": "Pair Ace",
    "K": "Pair King",
    "Q": "Pair Queen",
    "J": "Pair Jack",
}
PAIRS_PER_TOURNAMENT = len(CARD_LABELS)


def make_card_pairs(
    player_pairs: Sequence[Tuple[PlayerRef, PlayerRef]],
    names: Optional[Sequence[str]] = None,
) -> List[Pair]:
    """Label four player pairs with the Cards seeds A, K, Q, J in the given order."""
    if len(player_pairs) != PAIRS_PER_TOURNAMENT:
        raise InvalidPairError(
            f"Cards mode needs exactly {PAIRS_PER_TOURNAMENT} pairs, got {len(player_pairs)}"
        )
    if names is not None and len(names) != PAIRS_PER_TOURNAMENT:
        raise InvalidPairError(f"Expected {PAIRS_PER_TOURNAMENT} pair names, got {len(names)}")

    pairs = []
    for i, (label, players) in enumerate(zip(CARD_LABELS, player_pairs)):
        pairs.append(Pair(
            id=f"p{label}",
            name=names[i] if names else CARD_NAMES[label],
            players=tuple(players),
            label=label,
        ))
    return pairs


def seed_round1(pairs: Sequence[Pair]) -> List[Match]:
    """Seeds 1-2 meet on court 1, seeds 3-4 on court 2."""
    if len(pairs) != PAIRS_PER_TOURNAMENT:
        raise InvalidPairError(
            f"Cards mode needs exactly {PAIRS_PER_TOURNAMENT} pairs, got {len(pairs)}"
        )
    if len({p.id for p in pairs}) != len(pairs):
        raise InvalidPairError("Pair ids must be unique")

    players = [player.id for p in pairs for player in p.players]
    if len(set(players)) != len(players):
        raise InvalidPairError("A player cannot be part of two pairs")

    return [
        Match(id=generate_id(), round=1, court=1, team_a=pairs[0], team_b=pairs[1]),
        Match(id=generate_id(), round=1, court=2, team_a=pairs[2], team_b=pairs[3]),
    ]


def calculate_standings(matches: Sequence[Match], pairs: Sequence[Pair]) -> List[Standing]:
    """Rebuild the standings table from scratch.

    Ranked by wins, then points difference, then points scored. Pairs tied on
    all three keep the order in which they were supplied.
    """
    standings: Dict[str, Standing] = {
        p.id: Standing(pair_id=p.id, pair_name=p.name) for p in pairs
    }

    for m in matches:
        if m.result is None:
            continue

        s_a = standings.get(m.team_a.id)
        s_b = standings.get(m.team_b.id)
        if s_a is None or s_b is None:
            missing = m.team_a.id if s_a is None else m.team_b.id
            raise UnknownPairError(f"Match {m.id} references unknown pair {missing}")

        s_a.points_for += m.result.score_a
        s_a.points_against += m.result.score_b
        s_b.points_for += m.result.score_b
        s_b.points_against += m.result.score_a

        if m.result.winner == Winner.TEAM_A:
            s_a.wins += 1
        else:
            s_b.wins += 1

    for s in standings.values():
        s.diff = s.points_for - s.points_against

    # dicts keep insertion order and sorted() is stable
    return sorted(
        standings.values(),
        key=lambda s: (-s.wins, -s.diff, -s.points_for),
    )


def _find_court(matches: Sequence[Match], court: int) -> Optional[Match]:
    return next((m for m in matches if m is not None and m.court == court), None)


def generate_round2(round1_matches: Sequence[Optional[Match]]) -> List[Match]:
    """Crossover: court-1 winners meet on court 1, losers on court 2.

    Returns an empty list while either round-1 match is missing or has no
    result.
    """
    c1_match = _find_court(round1_matches, 1)
    c2_match = _find_court(round1_matches, 2)

    if c1_match is None or c2_match is None:
        return []
    if not c1_match.has_result or not c2_match.has_result:
        logger.debug("Round 1 still has pending matches, no round 2 yet")
        return []

    return [
        Match(
            id=generate_id(),
            round=2,
            court=1,
            team_a=c1_match.winner_pair,
            team_b=c2_match.winner_pair,
        ),
        Match(
            id=generate_id(),
            round=2,
            court=2,
            team_a=c1_match.loser_pair,
            team_b=c2_match.loser_pair,
        ),
    ]
