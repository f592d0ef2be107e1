import logging

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from cv_import.api.routes.preview import router as import_router
from cv_import.config import LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

API_VERSION = "0.1.0"

OPENAPI_TAGS = [
    {"name": "import", "description": "Build a reviewable CV import preview. Nothing is persisted."},
    {"name": "health", "description": "Liveness checks"},
]

app = FastAPI(
    title="CV Import (Preview Extraction Service)",
    description="Deterministic CV import service that turns DOCX/PDF/TXT CVs into a reviewable preview of profile, achievements and work history",
    version=API_VERSION,
    openapi_tags=OPENAPI_TAGS,
)

app.include_router(import_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "cv-import", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

def custom_openapi():
    """OpenAPI schema with the import tag descriptions, built once."""
    if not app.openapi_schema:
        app.openapi_schema = get_openapi(
            title="CV Import API",
            version=API_VERSION,
            description="Verbatim, reviewable extraction of profile, achievements and work history from CV text",
            routes=app.routes,
            tags=OPENAPI_TAGS,
        )
    return app.openapi_schema

app.openapi = custom_openapi
