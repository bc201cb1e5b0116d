# trekker/main.py

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# ---------------- ENV ----------------
load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), ".env"))

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("trekker")

from trekker.database import Base, SessionLocal, engine  # noqa: E402
from trekker.errors import AppError  # noqa: E402
from trekker.event.event_service import ChangeNotifier, EventBroadcaster  # noqa: E402

# ---------------- ROUTERS ----------------
from trekker.archive.archive_router import router as archive_router  # noqa: E402
from trekker.comment.comment_router import router as comment_router  # noqa: E402
from trekker.dependency.dependency_router import router as dependency_router  # noqa: E402
from trekker.epic.epic_router import router as epic_router  # noqa: E402
from trekker.event.event_router import router as event_router  # noqa: E402
from trekker.listing.list_router import router as list_router  # noqa: E402
from trekker.project.project_router import router as project_router  # noqa: E402
from trekker.task.task_router import router as task_router  # noqa: E402

EVENT_POLL_INTERVAL = float(os.getenv("EVENT_POLL_INTERVAL", "2.0"))

# ---------------- CORS ----------------
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

frontend_origin = os.getenv("FRONTEND_ORIGIN")
if frontend_origin:
    origins.append(frontend_origin)


# ---------------- ERRORS ----------------
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message, "code": exc.code})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Validation failed", "code": "VALIDATION_ERROR"})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error", extra={"path": request.url.path})
    return JSONResponse(status_code=500, content={"error": "Internal server error", "code": "INTERNAL_ERROR"})


def create_app(broadcaster: EventBroadcaster | None = None, init_db: bool = True) -> FastAPI:
    """Build the FastAPI app.

    ``broadcaster`` defaults to one backed by the configured database; the
    change-feed snapshot lives inside it for the lifetime of the app.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_db:
            # ---------------- DATABASE INIT ----------------
            logger.info("Checking database models...")
            Base.metadata.create_all(bind=engine)
            logger.info("Database ready.")
        yield
        await app.state.broadcaster.close()

    app = FastAPI(title="Trekker", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.state.broadcaster = broadcaster or EventBroadcaster(
        ChangeNotifier(SessionLocal), interval=EVENT_POLL_INTERVAL
    )

    api = APIRouter(prefix="/api")
    api.include_router(project_router)
    api.include_router(task_router)
    api.include_router(epic_router)
    api.include_router(comment_router)
    api.include_router(dependency_router)
    api.include_router(archive_router)
    api.include_router(list_router)
    api.include_router(event_router)
    app.include_router(api)

    # ---------------- ROOT ----------------
    @app.get("/")
    def read_root():
        return {"message": "Trekker backend running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("API_PORT", "3000"))
    logger.info("Starting REST API on port %d", port)
    uvicorn.run(app, host="0.0.0.0", port=port)
