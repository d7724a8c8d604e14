from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field, ValidationError
from typing import List
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
import logging

from . import core
from .session import GameSession, get_session
from .settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Initialize the rate limiter
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
app = FastAPI(
    title="2048 Game API",
    description="Play a single shared 4x4 game of 2048. "\
                "The server keeps the board; clients only send moves.",
    version="1.0.0"
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def current_rate_limit() -> str:
    """Limit string read per request, so a settings reload takes effect immediately."""
    return get_settings().rate_limit

# --- Pydantic Models for API requests and responses ---

class GameStateData(BaseModel):
    """Snapshot of the current game."""
    board: List[List[int]] = Field(..., description="The 4 x 4 board; 0 marks an empty cell.")
    score: int = Field(..., ge=0, description="Current score of the game.")
    game_over: bool = Field(..., alias="gameOver", description="True once the board is full with no merges left.")
    won: bool = Field(..., description="True once a 2048 tile has appeared.")


class MoveRequestData(BaseModel):
    """Data required to make a move."""
    direction: str = Field(..., description='Direction of the move: "up", "down", "left" or "right".')

# --- API Endpoints ---

@app.api_route("/api/new-game", methods=ANY_METHOD, response_model=GameStateData, summary="Start a New 2048 Game")
@limiter.limit(current_rate_limit)
async def new_game(request: Request, session: GameSession = Depends(get_session)):
    """
    Replaces the current game with a fresh one: an empty board with two random
    tiles, score 0 and both status flags false.
    """
    return GameStateData(**session.new_game())


@app.post(
    "/api/move",
    response_model=GameStateData,
    summary="Make a Move in the Game",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": MoveRequestData.model_json_schema()}},
        }
    },
)
@limiter.limit(current_rate_limit)
async def make_move(request: Request, session: GameSession = Depends(get_session)):
    """
    Moves every tile in the requested direction.

    The body is decoded as JSON whatever its Content-Type. If the move changed
    the board a new tile is spawned and the won / game-over flags are
    re-evaluated. The board is returned either way.
    """
    body = await request.body()
    try:
        request_data = MoveRequestData.model_validate_json(body)
    except ValidationError as e:
        logger.warning("Rejected malformed move payload: %s", e.errors())
        raise HTTPException(status_code=400, detail="Invalid request")

    try:
        direction = core.DIRECTION.from_name(request_data.direction)
    except ValueError as e:
        logger.warning("Rejected move: %s", e)
        raise HTTPException(status_code=400, detail="Invalid direction")

    return GameStateData(**session.move(direction))


@app.api_route("/api/move", methods=[m for m in ANY_METHOD if m != "POST"], include_in_schema=False)
async def move_wrong_method(request: Request):
    # Answered explicitly; otherwise the static mount below would claim the path.
    logger.warning("Rejected %s on /api/move", request.method)
    raise HTTPException(status_code=405, detail="Method not allowed")


@app.api_route("/api/state", methods=ANY_METHOD, response_model=GameStateData, summary="Get the Current Game")
@limiter.limit(current_rate_limit)
async def get_state(request: Request, session: GameSession = Depends(get_session)):
    """Returns the current game, starting one if none exists yet."""
    return GameStateData(**session.state())


# Web client; mounted last so the API routes take precedence.
if settings.static_dir.is_dir():
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
