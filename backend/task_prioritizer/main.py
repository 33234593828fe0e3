from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
import logging
import os
from dotenv import load_dotenv

from .models import BoardState, PrioritizeRequest, PromptRequest, ReorderRequest
from .board import BoardBusyError, TaskBoard
from .export import to_csv, to_json
from .gateway import GatewayError, generate_text

load_dotenv()


def resolve_log_level(name: str | None) -> int:
    """Numeric level for a level name; unknown names fall back to INFO."""
    level = logging.getLevelName((name or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


logging.basicConfig(
    level=resolve_log_level(os.getenv("LOG_LEVEL")),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:5173").split(",")
INDEX_FILE = Path(__file__).parent / "static" / "index.html"

@asynccontextmanager
async def lifespan(app: FastAPI):
    # One board per process; it lives as long as the page session
    app.state.board = TaskBoard()
    yield

app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_board(request: Request) -> TaskBoard:
    return request.app.state.board


@app.get("/")
def index() -> FileResponse:
    return FileResponse(INDEX_FILE)


@app.post("/api/gettasks")
async def get_tasks(prompt_request: PromptRequest):
    """Forward a prompt to the model and relay its text."""
    try:
        text = await generate_text(prompt_request.prompt)
    except GatewayError:
        return JSONResponse({"error": "Failed to generate content"}, status_code=500)
    return {"text": text}


@app.get("/api/board")
def get_board_state(board: TaskBoard = Depends(get_board)) -> BoardState:
    return board.state()


@app.post("/api/board/prioritize")
async def prioritize(prioritize_request: PrioritizeRequest, board: TaskBoard = Depends(get_board)) -> BoardState:
    """Categorize newline-separated tasks into the three priority buckets."""
    try:
        return await board.prioritize(prioritize_request.tasks, generate_text)
    except BoardBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))


@app.post("/api/board/reorder")
def reorder_task(reorder_request: ReorderRequest, board: TaskBoard = Depends(get_board)) -> BoardState:
    return board.reorder(reorder_request.active_id, reorder_request.over_id)


@app.get("/api/board/export/json")
def export_json(board: TaskBoard = Depends(get_board)) -> Response:
    return Response(
        content=to_json(board.tasks),
        media_type="application/json;charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="tasks.json"'},
    )


@app.get("/api/board/export/csv")
def export_csv(board: TaskBoard = Depends(get_board)) -> Response:
    return Response(
        content=to_csv(board.tasks),
        media_type="text/csv;charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="tasks.csv"'},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
