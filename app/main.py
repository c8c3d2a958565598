import logging
import time

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import settings
from app.routes.farming import router as farming_router
from app.services.cache import result_cache
from app.services.protocol_db import protocol_db
from app.utils.errors import error_response

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s | %(name)-20s | %(levelname)-7s | %(message)s",
)
logger = logging.getLogger("app")


class RequestTimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} → {response.status_code} "
            f"({duration_ms:.1f}ms)"
        )
        return response


app = FastAPI(
    title="Airdrop Farming Optimizer API",
    description=(
        "Score protocol coverage, find eligibility gaps, build farming "
        "strategies and plan action sequences for airdrop farming."
    ),
    version="0.1.0",
)

app.add_middleware(RequestTimingMiddleware)

app.include_router(farming_router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"400 {request.method} {request.url.path}: invalid body")
    return error_response(
        400, "Invalid request body", detail=jsonable_encoder(exc.errors())
    )


@app.on_event("startup")
async def startup():
    logger.info("Loading protocol catalog...")
    protocol_db.load()
    result_cache.clear()
    logger.info(f"Ready — {protocol_db.count} protocols loaded")


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "protocols_loaded": protocol_db.count,
        "chains": protocol_db.chains,
    }


def run():
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
