"""JSON HTTP API: POST /api/tailor and POST /api/coverletter."""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from tailorkit.clients.ollama_client import OllamaClient
from tailorkit.config import load_config
from tailorkit.errors import TailorError
from tailorkit.pipeline.service import TailorService

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="tailorkit")


async def get_service() -> AsyncIterator[TailorService]:
    config = load_config()
    async with OllamaClient(
        base_url=config.ollama.base_url,
        model=config.ollama.model,
        timeout=config.ollama.timeout,
    ) as llm:
        yield TailorService(llm, config)


@app.exception_handler(TailorError)
async def _tailor_error_handler(request: Request, exc: TailorError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code)


@app.exception_handler(Exception)
async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s failed", request.method, request.url.path)
    return JSONResponse({"error": str(exc)}, status_code=500)


async def _body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        # parse_request rejects anything that is not an object
        return None


@app.post("/api/tailor")
async def tailor_endpoint(
    request: Request,
    service: TailorService = Depends(get_service),
) -> JSONResponse:
    result = await service.tailor(await _body(request))
    return JSONResponse({"tailoredResume": result.model_dump(exclude={"metadata"})})


@app.post("/api/coverletter")
async def cover_letter_endpoint(
    request: Request,
    service: TailorService = Depends(get_service),
) -> JSONResponse:
    letter = await service.cover_letter(await _body(request))
    return JSONResponse({"coverLetter": letter.body, "company": letter.company})


@app.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}
