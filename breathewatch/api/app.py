"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from breathewatch.api.deps import init_models
from breathewatch.api.routes import (
    air_quality,
    comparison,
    locations,
    pollution_sources,
    reports,
    users,
)
from breathewatch.config import settings
from breathewatch.data.directory import LocationDirectory
from breathewatch.errors import BreatheWatchError, ErrorKind

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UPSTREAM_UNAVAILABLE: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # No traffic without a directory: a load failure aborts startup.
    app.state.directory = LocationDirectory.load(settings.neighborhoods_path)
    await init_models()
    yield


app = FastAPI(
    title="BreatheWatch",
    description="NYC neighborhood air quality scores, comparisons, pollution reports and user dashboards",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BreatheWatchError)
async def breathewatch_error_handler(request: Request, exc: BreatheWatchError):
    status = STATUS_BY_KIND[exc.kind]
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content={"detail": exc.message, "kind": exc.kind.value})


app.include_router(locations.router)
app.include_router(air_quality.router)
app.include_router(comparison.router)
app.include_router(reports.router)
app.include_router(pollution_sources.router)
app.include_router(users.router)


@app.get("/health")
async def health(request: Request):
    directory = getattr(request.app.state, "directory", None)
    return {"status": "ok", "neighborhoods": len(directory) if directory is not None else 0}
