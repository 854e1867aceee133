import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookmarks import router as bookmarks_router
from core import config, db, logs

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logs.configure_logging()
    # One pool per process, shared by every request through `db.get_db`.
    app.state.db = await db.Database.connect(
        config.database_url(),
        min_size=config.pool_min_size(),
        max_size=config.pool_max_size(),
        command_timeout=config.command_timeout(),
    )
    try:
        yield
    finally:
        await app.state.db.close()
        app.state.db = None


app = FastAPI(title="bookmarks-api", lifespan=lifespan)

# Allow local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(bookmarks_router.router, tags=["bookmarks"])


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request_failed method=%s path=%s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error."})


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "bookmarks api"}


def run() -> None:
    logs.configure_logging()
    uvicorn.run(app, host=config.host(), port=config.port())


if __name__ == "__main__":
    run()
