"""
Prism FastAPI Application — Risk factor classification and profile scoring.

  GET  /health                  → {"status": "ok"}
  GET  /risk-factors            → reference dataset lookup
  POST /risk-factors/classify   → descriptor per factor id
  POST /risk-factors/group      → display-ordered category groups
  *    /risk-profiles/...       → profile listing, validation, default switch
  POST /score                   → profile-weighted score for factor ids
  POST /assess                  → filter, score and group a screened entity
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prism.api.routes.health import router as health_router
from prism.api.routes.risk_factors import router as risk_factors_router
from prism.api.routes.risk_profiles import router as risk_profiles_router
from prism.api.routes.scoring import router as scoring_router
from prism.config import settings
from prism.profiles.errors import ProfileConfigurationError

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("prism")

app = FastAPI(
    title="Prism",
    description="Risk factor classification and profile-based risk scoring",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(risk_factors_router)
app.include_router(risk_profiles_router)
app.include_router(scoring_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    body = await request.body()
    logger.error(f"Validation Error. Raw body: {body.decode('utf-8')[:500]} | Errors: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors(), "body": body.decode("utf-8")[:100]},
    )


@app.exception_handler(ProfileConfigurationError)
async def profile_configuration_handler(request: Request, exc: ProfileConfigurationError):
    logger.error(f"Risk profile configuration error on {request.url.path}: {exc}")
    return JSONResponse(status_code=409, content={"detail": str(exc)})
