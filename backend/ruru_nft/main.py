"""
backend/ruru_nft/main.py

FastAPI Entrypoint.
Wires the Ruru NFT relay together.

Responsibilities:
- Initialize FastAPI app
- Register routers (upload/mint, NFT queries)
- Setup middleware (CORS) and JSON error handlers
- Health check endpoint
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ruru_nft import __version__
from ruru_nft.core.config import settings
from ruru_nft.core.exceptions import RelayError, ValidationError
from ruru_nft.core.logger import logger
from ruru_nft.routes import nfts, upload

app = FastAPI(
    title=f"{settings.PROJECT_NAME} Relay",
    description="Pins NFT images and metadata to IPFS and keeps their records",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error} ({exc.details})")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.error}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Bodies pydantic cannot parse get the same 400 shape as other bad input."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.info(f"{request.method} {request.url.path} -> 400: {details}")
    body = ValidationError("Invalid request body", details).to_dict()
    return JSONResponse(status_code=ValidationError.status_code, content=body)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": f"{settings.PROJECT_NAME} relay is running"}


app.include_router(upload.router)
app.include_router(nfts.router)
