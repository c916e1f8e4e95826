# Run from project root: uvicorn app.main:app --reload  (or: python -m app.main)

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.api.routes import router
from app.core.config import HOST, PORT, STATIC_DIR
from app.core.errors import ApiError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


app = FastAPI(title="Toy Recall Radar")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


app.include_router(router)
# Mounted last so /api/* and /health take precedence over static files.
app.mount("/", StaticFiles(directory=STATIC_DIR, html=True, check_dir=False), name="static")


if __name__ == "__main__":
    logger.info("Toy Recall Radar listening on :%d", PORT)
    uvicorn.run("app.main:app", host=HOST, port=PORT)
