import logging
from dataclasses import replace
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from cards.controller import TournamentController
from cards.exceptions import (
    CardsError,
    InvalidInputError,
    MatchNotFoundError,
    TournamentStateError,
)
from cards.functions import make_card_pairs
from cards.models import MatchResult, Pair, PlayerRef, generate_id
from cards.schemas import PairIn, ResultIn, TournamentCreate
from settings import Settings, get_settings
from storage import Tournament, get_tournaments

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/cards', tags=['Cards'])


def _http_error(exc: CardsError) -> HTTPException:
    if isinstance(exc, MatchNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, TournamentStateError):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, InvalidInputError):
        return HTTPException(status_code=422, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


def _build_pairs(pairs_in: List[PairIn]) -> List[Pair]:
    player_pairs = [
        tuple(PlayerRef(id=p.id, name=p.name) for p in pair.players)
        for pair in pairs_in
    ]
    pairs = make_card_pairs(player_pairs)
    # Caller-supplied ids and names win over the card defaults
    return [
        replace(pair, id=pair_in.id or pair.id, name=pair_in.name or pair.name)
        for pair, pair_in in zip(pairs, pairs_in)
    ]


def _get_tournament(tid: str, tournaments: Dict[str, Tournament]) -> Tournament:
    t = tournaments.get(tid)
    if not t:
        raise HTTPException(status_code=404, detail="Tournament not found")
    return t


# Routes

@router.get("/")
async def index(tournaments: Dict[str, Tournament] = Depends(get_tournaments)):
    return [t.summary() for t in tournaments.values()]


@router.post("/tournament/create", status_code=status.HTTP_201_CREATED)
async def create_tournament(
    body: TournamentCreate,
    tournaments: Dict[str, Tournament] = Depends(get_tournaments),
    settings: Settings = Depends(get_settings),
):
    try:
        pairs = _build_pairs(body.pairs)
        controller = TournamentController(
            pairs,
            tie_policy=settings.tie_policy,
            allow_overwrite=settings.allow_result_overwrite,
        )
    except CardsError as e:
        raise _http_error(e) from e

    tid = generate_id()
    t = Tournament(id=tid, name=body.name, controller=controller)
    tournaments[tid] = t
    logger.info(f"Created Cards tournament {tid} '{body.name}'")
    return t.to_dict()


@router.head("/tournament/{tid}")
async def tournament_exists(tid: str, tournaments: Dict[str, Tournament] = Depends(get_tournaments)):
    _get_tournament(tid, tournaments)
    return Response(status_code=200)


@router.get("/tournament/{tid}")
async def tournament_view(tid: str, tournaments: Dict[str, Tournament] = Depends(get_tournaments)):
    return _get_tournament(tid, tournaments).to_dict()


@router.get("/tournament/{tid}/standings")
async def tournament_standings(tid: str, tournaments: Dict[str, Tournament] = Depends(get_tournaments)):
    t = _get_tournament(tid, tournaments)
    return [s.to_dict() for s in t.controller.standings]


@router.post("/tournament/{tid}/matches/{match_id}/result")
async def submit_result(
    tid: str,
    match_id: str,
    body: ResultIn,
    tournaments: Dict[str, Tournament] = Depends(get_tournaments),
):
    t = _get_tournament(tid, tournaments)
    try:
        result = MatchResult(
            score_a=body.score_a,
            score_b=body.score_b,
            is_golden_point=body.is_golden_point,
        )
        t.controller.record_result(match_id, result)
    except CardsError as e:
        logger.info(f"Rejected result for match {match_id} in tournament {tid}: {e}")
        raise _http_error(e) from e

    if t.controller.is_complete:
        logger.info(f"Tournament {tid} complete")
    return t.to_dict()


@router.post("/tournament/{tid}/delete")
async def delete_tournament(tid: str, tournaments: Dict[str, Tournament] = Depends(get_tournaments)):
    if tournaments.pop(tid, None) is None:
        raise HTTPException(status_code=404, detail="Tournament not found")
    logger.info(f"Deleted Cards tournament {tid}")
    return {"deleted": tid}
