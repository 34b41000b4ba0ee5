from typing import List, Optional

from pydantic import BaseModel, Field


class PlayerIn(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)


class PairIn(BaseModel):
    name: Optional[str] = None  # defaults to the card name, e.g. "Pair Ace"
    id: Optional[str] = None
    players: List[PlayerIn] = Field(min_length=2, max_length=2)


class TournamentCreate(BaseModel):
    name: str = Field(min_length=1)
    pairs: List[PairIn] = Field(min_length=4, max_length=4)


class ResultIn(BaseModel):
    score_a: int = Field(ge=0)
    score_b: int = Field(ge=0)
    is_golden_point: bool = False
