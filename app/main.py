import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routers import health as health_router, moon, page
from .runtime import ensure_ticker_started, stop_ticker
from .settings import settings


logger = logging.getLogger(__name__)

def custom_generate_unique_id(route):
    # method + path is always unique
    return f"{list(route.methods)[0].lower()}_{route.path.replace('/', '_').strip('_')}"

app = FastAPI(
    title="Moon Phase",
    version="0.1.0",
    generate_unique_id_function=custom_generate_unique_id
)

@app.exception_handler(Exception)
async def _global_exception_handler(request: Request, exc: Exception):
    logger.exception("[MOON] unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"ok": False, "data": None, "error": str(exc)})

@app.on_event("startup")
async def _log_routes():
    for r in app.routes:
        methods = sorted(getattr(r, "methods", None) or [])
        path = getattr(r, "path", "")
        logger.info("[ROUTE] %s %s", methods, path)


@app.on_event("startup")
async def _start_ticker():
    await ensure_ticker_started()


@app.on_event("shutdown")
async def _stop_ticker():
    await stop_ticker()

origins = [o.strip() for o in (settings.CORS_ORIGINS or "*").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router.router)
app.include_router(page.router)
app.include_router(moon.router)
