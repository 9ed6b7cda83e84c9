import logging
from io import BytesIO

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field

from boggle.errors import ConfigurationError, InvalidArgument, NotReadyError
from boggle.settings import settings

logging.basicConfig(level=settings.LOG_LEVEL.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("boggle")


class BoardRequest(BaseModel):
    board: list[str] = Field(..., min_length=1)


class SolveRequest(BoardRequest):
    min_length: int | None = None


class LocateRequest(BoardRequest):
    word: str


class ScoreRequest(BoardRequest):
    words: list[str]
    min_length: int | None = None


class ImageRequest(BoardRequest):
    word: str | None = None


def create_app(lexicon=None) -> FastAPI:
    """Build the API. Pass ``lexicon`` to skip loading the dictionary at startup."""
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        if application.state.lexicon is None:
            from boggle.lexicon import load_lexicon
            logger.info("Loading dictionary from %s", settings.DICTIONARY_PATH)
            try:
                application.state.lexicon = load_lexicon(settings.DICTIONARY_PATH)
            except ConfigurationError as e:
                logger.error("Dictionary unavailable, searches will fail: %s", e)
        yield

    application = FastAPI(title="Boggle Search", lifespan=lifespan)
    application.state.lexicon = lexicon

    @application.exception_handler(InvalidArgument)
    async def invalid_argument(request: Request, exc: InvalidArgument):
        return JSONResponse({"detail": str(exc)}, status_code=400)

    @application.exception_handler(NotReadyError)
    async def not_ready(request: Request, exc: NotReadyError):
        return JSONResponse({"detail": str(exc)}, status_code=503)

    @application.exception_handler(ConfigurationError)
    async def configuration_error(request: Request, exc: ConfigurationError):
        logger.error("Configuration error: %s", exc)
        return JSONResponse({"detail": str(exc)}, status_code=500)

    def _engine(tiles: list[str]):
        # One board per request: visitation flags are never shared between searches
        from boggle.board import Board
        from boggle.engine import SearchEngine
        return SearchEngine(application.state.lexicon, Board(tiles))

    @application.get("/health")
    async def health():
        lex = application.state.lexicon
        return {
            "status": "ok",
            "lexicon_loaded": lex is not None,
            "lexicon_size": len(lex) if lex is not None else 0,
        }

    @application.post("/solve")
    async def solve(body: SolveRequest):
        from boggle.metrics import StageTimer

        timer = StageTimer()
        min_length = body.min_length if body.min_length is not None else settings.MIN_WORD_LENGTH

        with timer.stage("board"):
            engine = _engine(body.board)
        logger.info("Board %dx%d: %s", engine.board.size, engine.board.size, engine.get_board())

        with timer.stage("solve"):
            found = engine.find_all_words(min_length)
        timer.count("nodes", engine.last_nodes)

        # Longest first, then alphabetical
        ranked = sorted(found, key=lambda w: (-len(w), w))
        words = ranked[:settings.MAX_RESULTS] if settings.MAX_RESULTS > 0 else ranked
        logger.info("Found %d words (returning top %d)", len(found), len(words))

        payload = {
            "grid_size": engine.board.size,
            "board": engine.board.rows(),
            "min_length": min_length,
            "words": words,
            "word_count": len(words),
            "total_words": len(found),
        }
        if settings.DEBUG:
            with timer.stage("paths"):
                payload["paths"] = {w: engine.locate_word(w) for w in words}
        payload["stage_timings"] = timer.summary()
        return JSONResponse(payload)

    @application.post("/locate")
    async def locate(body: LocateRequest):
        engine = _engine(body.board)
        path = engine.locate_word(body.word)
        logger.info("Locate %r: %s", body.word, path or "not found")
        return {"word": body.word, "found": bool(path), "path": path}

    @application.post("/score")
    async def score(body: ScoreRequest):
        min_length = body.min_length if body.min_length is not None else settings.MIN_WORD_LENGTH
        engine = _engine(body.board)
        points = engine.score(body.words, min_length)
        return {"score": points, "min_length": min_length}

    @application.post("/board")
    async def board_export(body: BoardRequest):
        from boggle.render import board_to_dict
        return board_to_dict(_engine(body.board).board)

    @application.post("/board.png")
    async def board_image(body: ImageRequest):
        from boggle.render import encode_png, render_board_image

        engine = _engine(body.board)
        highlight = engine.locate_word(body.word) if body.word else None
        img = render_board_image(engine.board, settings.BOARD_IMAGE_CELL_SIZE, highlight)
        return StreamingResponse(BytesIO(encode_png(img)), media_type="image/png")

    @application.get("/api/settings")
    async def api_get_settings():
        from boggle.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from boggle.settings import update_settings, get_editable_settings
        body = await request.json()
        if not isinstance(body, dict):
            raise HTTPException(400, "Expected a JSON object of setting values")
        errors = update_settings(settings, **body)
        logger.setLevel(settings.LOG_LEVEL)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
