import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

import uvicorn
from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import JSONResponse

from .bank import QuestionBank
from .config import settings
from .engine import QuizEngine
from .exceptions import BankNotLoaded, QuizError
from .models import ReviewMode

logger = logging.getLogger(__name__)


# --- Logging Setup ---
def configure_logging() -> None:
    package_logger = logging.getLogger("practest")
    package_logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    if package_logger.handlers:
        return

    if settings.LOG_TO_FILE:
        if not os.path.exists(settings.LOG_DIR):
            os.makedirs(settings.LOG_DIR)
        log_path = os.path.join(settings.LOG_DIR, settings.LOG_FILE)
        handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    )
    package_logger.addHandler(handler)


# --- Lifecycle ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    bank = await QuestionBank.load(settings.QUESTIONS_DIR, settings.TOPICS)
    logger.info(f"Question bank ready: {len(bank)} questions")
    app.state.engine = QuizEngine(bank)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
    lifespan=lifespan,
)


@app.exception_handler(QuizError)
async def quiz_error_handler(request: Request, exc: QuizError):
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


# --- Dependencies ---
def get_engine(request: Request) -> QuizEngine:
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise BankNotLoaded("Question bank is not loaded")
    return engine


# --- Routes ---
@app.get("/api/topics")
def get_topics(engine: QuizEngine = Depends(get_engine)):
    return engine.bank.get_topics()


@app.post("/api/start")
def start_test(
    count: int = Form(settings.TEST_SIZE),
    balanced: bool = Form(settings.BALANCED),
    engine: QuizEngine = Depends(get_engine),
):
    engine.start_test(count, balanced)
    return engine.current_view()


@app.get("/api/quiz")
def get_question(engine: QuizEngine = Depends(get_engine)):
    return engine.current_view()


@app.post("/api/answer")
def select_answer(
    selected_option_index: int = Form(...),
    engine: QuizEngine = Depends(get_engine),
):
    engine.select_answer(selected_option_index)
    return engine.current_view()


@app.post("/api/next")
def next_question(engine: QuizEngine = Depends(get_engine)):
    engine.next()
    return engine.current_view()


@app.post("/api/prev")
def prev_question(engine: QuizEngine = Depends(get_engine)):
    engine.prev()
    return engine.current_view()


@app.get("/api/progress")
def get_progress(engine: QuizEngine = Depends(get_engine)):
    return engine.progress()


@app.post("/api/submit")
def submit_test(engine: QuizEngine = Depends(get_engine)):
    result = engine.submit()
    return {
        "score": result.score,
        "total": result.total,
        "incorrect_count": result.incorrect_count,
        "score_percentage": result.percentage,
        "timestamp": result.timestamp,
    }


@app.post("/api/retry")
def retry_incorrect(engine: QuizEngine = Depends(get_engine)):
    engine.retry_incorrect()
    return engine.current_view()


@app.get("/api/review")
def review_current(
    mode: ReviewMode = ReviewMode.ALL, engine: QuizEngine = Depends(get_engine)
):
    return engine.review_current(mode)


@app.get("/api/history")
def list_history(engine: QuizEngine = Depends(get_engine)):
    return engine.list_history()


@app.get("/api/history/viewed/review")
def review_viewed_session(
    mode: ReviewMode = ReviewMode.ALL, engine: QuizEngine = Depends(get_engine)
):
    return engine.review_viewed(mode)


@app.get("/api/history/{index}")
def get_session_detail(index: int, engine: QuizEngine = Depends(get_engine)):
    result = engine.view_session(index)
    return {
        **result.model_dump(by_alias=True),
        "number": index + 1,
        "score_percentage": result.percentage,
    }


@app.get("/api/history/{index}/review")
def review_session(
    index: int,
    mode: ReviewMode = ReviewMode.ALL,
    engine: QuizEngine = Depends(get_engine),
):
    return engine.review_session(index, mode)


@app.post("/api/reset")
def reset_session(engine: QuizEngine = Depends(get_engine)):
    engine.reset()
    return {"status": "success"}


if __name__ == "__main__":
    uvicorn.run("practest.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
