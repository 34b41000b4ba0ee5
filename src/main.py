import logging

from fastapi import FastAPI

from cards.router import router as cards_router
from settings import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="Padel Cards")

app.include_router(cards_router)


@app.get("/")
async def index():
    return {"modes": ["cards"]}
