import argparse
import logging
import logging.config
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import Body, Depends, FastAPI, HTTPException

from .catalog import PACKAGE_LEVELS
from .config import settings
from .engine import DocumentAutoRequestEngine
from .models import ApplicationData, DocumentRequirement, DocumentRequirements

# ========================= CONFIG & LOGGING =========================

_handlers: Dict[str, Dict[str, Any]] = {
    "console": {"class": "logging.StreamHandler", "formatter": "simple"},
}
if settings.LOG_FILE:
    _handlers["file"] = {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "simple",
        "filename": settings.LOG_FILE,
        "maxBytes": 10_000_000,
        "backupCount": 5,
    }

logging.config.dictConfig({
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"}
    },
    "handlers": _handlers,
    "root": {"level": settings.LOG_LEVEL, "handlers": list(_handlers)},
})

logger = logging.getLogger("doc_request_engine.api")

# Built once at startup; a broken catalog stops the service here rather than per request
default_engine = DocumentAutoRequestEngine()


def get_engine() -> DocumentAutoRequestEngine:
    return default_engine


# ========================= FASTAPI APP =========================

app = FastAPI(
    title="Document Auto-Request API",
    description="Derives the supporting documents required for a credit application",
    version="1.0.0",
)


@app.post("/requirements", response_model=DocumentRequirements, tags=["Requirements"])
def generate_requirements(
    application: ApplicationData,
    engine: DocumentAutoRequestEngine = Depends(get_engine),
):
    try:
        return engine.generate_requirements(application)
    except Exception as e:
        logger.error(f"Requirement generation failed: {e}")
        raise HTTPException(status_code=500, detail=f"Requirement generation failed: {str(e)}")


@app.post(
    "/instruments/{instrument_id}/requirements",
    response_model=DocumentRequirements,
    tags=["Requirements"],
)
def generate_instrument_requirements(
    instrument_id: str,
    application: Optional[Dict[str, Any]] = Body(default=None),
    engine: DocumentAutoRequestEngine = Depends(get_engine),
):
    try:
        return engine.generate_requirements_for_instrument(instrument_id, application)
    except Exception as e:
        logger.error(f"Requirement generation failed for instrument {instrument_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Requirement generation failed: {str(e)}")


@app.get("/documents", response_model=List[DocumentRequirement], tags=["Catalog"])
def list_documents(engine: DocumentAutoRequestEngine = Depends(get_engine)):
    return list(engine.catalog)


@app.get("/documents/{document_id}", response_model=DocumentRequirement, tags=["Catalog"])
def get_document(document_id: str, engine: DocumentAutoRequestEngine = Depends(get_engine)):
    document = engine.catalog.get(document_id)
    if document is None:
        raise HTTPException(status_code=404, detail="Document not found")
    return document


@app.get("/packages/{level}", response_model=List[DocumentRequirement], tags=["Catalog"])
def get_package(level: int, engine: DocumentAutoRequestEngine = Depends(get_engine)):
    if level not in PACKAGE_LEVELS:
        raise HTTPException(status_code=404, detail="Package level must be between 1 and 4")
    return engine.catalog.resolve(engine.catalog.package_document_ids(level))


@app.get("/health")
def health(engine: DocumentAutoRequestEngine = Depends(get_engine)):
    return {"status": "healthy", "documents": len(engine.catalog)}


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    args = parser.parse_args()
    uvicorn.run(app, host=args.host, port=args.port)
