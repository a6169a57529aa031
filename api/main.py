import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from comments import router as comments_router
from core import db, errors, schema
from posts import router as posts_router

WELCOME_TEXT = "Welcome to the Teacher-Student App API!"


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process; a schema failure aborts startup.
    await db.init_pool()
    try:
        await schema.ensure_schema()
        yield
    finally:
        await db.close_pool()


def cors_allow_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "").strip()
    if not raw:
        return ["http://localhost:5173", "http://127.0.0.1:5173"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


app = FastAPI(title="Teacher-Student Board API", lifespan=lifespan)

# Allow local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

errors.install_handlers(app)

app.include_router(posts_router.router, tags=["posts"])
app.include_router(comments_router.router, tags=["comments"])


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return WELCOME_TEXT
