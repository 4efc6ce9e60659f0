# main.py
# FastAPI app exposing POST /process-tiktok plus saved-trip endpoints

import logging
from contextlib import asynccontextmanager
from typing import Optional
import httpx
from fastapi import FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from acquisition import ContentAcquirer
from config import DEFAULT_LOG_LEVEL, LOG_LEVELS, Settings
from errors import ClipToTripError
from handler import delete_saved, list_saved, process_video
from models import DeleteResponse, ItineraryListResponse, ProcessRequest, ProcessResponse

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

log = logging.getLogger("cliptotrip")


def error_response(message: str) -> JSONResponse:
    # every failure is a flat 500; callers only see the message
    return JSONResponse(status_code=500, content={"error": message}, headers=CORS_HEADERS)


def create_app(
    settings: Optional[Settings] = None,
    http: Optional[httpx.AsyncClient] = None,
    acquirer: Optional[ContentAcquirer] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    level = settings.LOG_LEVEL if settings.LOG_LEVEL in LOG_LEVELS else DEFAULT_LOG_LEVEL
    logging.basicConfig(level=level)

    missing = settings.missing()
    if missing:
        log.warning("missing configuration: %s (requests will fail)", ", ".join(missing))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_client = app.state.http is None
        if owns_client:
            app.state.http = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_S)
        try:
            yield
        finally:
            if owns_client:
                await app.state.http.aclose()
                app.state.http = None

    app = FastAPI(title="ClipToTrip API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.http = http
    app.state.acquirer = acquirer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    # global JSON error handling
    # - ClipToTripError -> { "error": <message> }
    # - network errors talking to upstreams -> { "error": "Upstream request failed: ..." }
    # - anything else -> generic message, stack logged once
    @app.exception_handler(ClipToTripError)
    async def app_error_handler(request: Request, exc: ClipToTripError):
        log.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
        return error_response(exc.message)

    @app.exception_handler(httpx.HTTPError)
    async def upstream_error_handler(request: Request, exc: httpx.HTTPError):
        log.warning("upstream request failed: %r", exc)
        return error_response(f"Upstream request failed: {exc.__class__.__name__}")

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        log.warning("invalid request body: %s", exc.errors())
        return error_response("Invalid request body")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        log.exception("Unhandled exception")
        return error_response("Failed to process video")

    @app.options("/process-tiktok")
    @app.options("/itineraries")
    @app.options("/itineraries/{itinerary_id}")
    async def preflight():
        return Response(status_code=200, headers=CORS_HEADERS)

    @app.post("/process-tiktok", response_model=ProcessResponse)
    async def process_tiktok(
        req: ProcessRequest,
        request: Request,
        authorization: Optional[str] = Header(None),
    ):
        """
        Video URL -> content bundle -> generated itinerary -> saved row.
        """
        saved = await process_video(
            req, authorization, request.app.state.settings, request.app.state.http,
            acquirer=request.app.state.acquirer,
        )
        body = ProcessResponse(itinerary=saved).model_dump()
        return JSONResponse(content=body, headers=CORS_HEADERS)

    @app.get("/itineraries", response_model=ItineraryListResponse)
    async def get_itineraries(request: Request, authorization: Optional[str] = Header(None)):
        saved = await list_saved(authorization, request.app.state.settings, request.app.state.http)
        body = ItineraryListResponse(itineraries=saved).model_dump()
        return JSONResponse(content=body, headers=CORS_HEADERS)

    @app.delete("/itineraries/{itinerary_id}", response_model=DeleteResponse)
    async def remove_itinerary(itinerary_id: str, request: Request,
                               authorization: Optional[str] = Header(None)):
        await delete_saved(itinerary_id, authorization, request.app.state.settings, request.app.state.http)
        return JSONResponse(content=DeleteResponse(id=itinerary_id).model_dump(), headers=CORS_HEADERS)

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()
