import argparse
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from player_api.db import Session, engine
from player_api.load_secrets import log_level, seed_players_on_startup
from player_api.models.schemas import Base
from player_api.routers import players
from player_api.services.player_db import seed_default_players

logging.basicConfig(level=log_level)
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app):
    """Create the player table and, if enabled, the default roster.
    This function is called to start the server.
    """
    async with engine.begin() as conn:
        # Existing tables are left untouched
        await conn.run_sync(Base.metadata.create_all)

    if seed_players_on_startup:
        async with Session() as session:
            await seed_default_players(session)

    try:
        yield
    finally:
        await engine.dispose()
        logging.info("Stop Server")


app = FastAPI(lifespan=lifespan)
app.include_router(players.player_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed parameters or bodies are client errors: answer 400, not 422."""
    logging.info(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Player registry server")
    parser.add_argument("--host", type=str, default="0.0.0.0", help="Bind address")
    parser.add_argument("--port", type=int, default=8080, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    return parser


def run() -> None:
    args = get_parser().parse_args()
    uvicorn.run("player_api.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    run()
