from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hivelytics.api.routes import router as api_router
from hivelytics.core.config import get_settings
from hivelytics.core.logging import configure_logging
from hivelytics.services.hive_client import HiveClientError

LOGGER = logging.getLogger(__name__)

settings = get_settings()
configure_logging()

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.frontend_origins,
    allow_methods=['GET'],
    allow_headers=['*'],
)

app.include_router(api_router)


@app.exception_handler(HiveClientError)
async def hive_client_error_handler(request: Request, exc: HiveClientError) -> JSONResponse:
    LOGGER.warning('Hive request for %s failed: %s', request.url.path, exc)
    return JSONResponse(status_code=502, content={'detail': 'Failed to load Hive data'})


@app.get('/health')
def health() -> dict[str, str]:
    return {'status': 'ok'}
