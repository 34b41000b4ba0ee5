import os
from dataclasses import dataclass

from dotenv import load_dotenv

from cards.controller import TiePolicy

load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    tie_policy: TiePolicy = TiePolicy.TEAM_B
    allow_result_overwrite: bool = False


def get_settings() -> Settings:
    """Read settings from the environment (and .env, loaded at import)."""
    raw_policy = os.getenv("CARDS_TIE_POLICY", TiePolicy.TEAM_B.value).strip().lower()
    try:
        tie_policy = TiePolicy(raw_policy)
    except ValueError:
        allowed = ", ".join(p.value for p in TiePolicy)
        raise ValueError(f"CARDS_TIE_POLICY must be one of: {allowed} (got {raw_policy!r})")

    overwrite = os.getenv("CARDS_ALLOW_RESULT_OVERWRITE", "false").strip().lower()

    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        tie_policy=tie_policy,
        allow_result_overwrite=overwrite in _TRUE_VALUES,
    )
