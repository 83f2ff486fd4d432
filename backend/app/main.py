import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.health import router as health_router
from app.api.responses import error_response, validation_message
from app.api.routes_catalogue import router as catalogue_router
from app.api.routes_checkout import router as checkout_router
from app.api.routes_newsletter import router as newsletter_router
from app.config import settings
from app.db import init_db
from app.utils.logging import get_logger

log = get_logger("app", "YO-NUTRI")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    init_db()
    log.info(f"Yo Nutri API running on http://{settings.APP_HOST}:{settings.APP_PORT}")
    yield


app = FastAPI(title="Yo Nutri - Shop Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # malformed bodies are rejected before any DB work
    return error_response(400, validation_message(exc))


app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])

app.include_router(newsletter_router, prefix="/api/newsletter", tags=["newsletter"])

app.include_router(checkout_router, prefix="/api/checkout", tags=["checkout"])

# storefront (index.html, images/) served from the same origin when present
if os.path.isdir(settings.STATIC_DIR):
    app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")


def run():
    import uvicorn

    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)


if __name__ == "__main__":
    run()
