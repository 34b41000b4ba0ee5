from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict

from cards.controller import TournamentController


@dataclass
class Tournament:
    id: str
    name: str
    controller: TournamentController
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def summary(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "current_round": self.controller.current_round,
            "phase": self.controller.phase.value,
            "created_at": self.created_at.isoformat(),
        }

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, **self.controller.to_dict()}


# In-memory storage, lives as long as the process
tournaments_db: Dict[str, Tournament] = {}


def get_tournaments() -> Dict[str, Tournament]:
    return tournaments_db
