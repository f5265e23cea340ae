"""
Prospection - API Backend

Démarre avec:
    uvicorn server:app --host 0.0.0.0 --port 5000 --reload
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from config import CORS_ORIGINS, DB_NAME, LOG_LEVEL, create_mongo_client
from services.errors import ProspectionError
from services.repositories import ensure_indexes

# Configuration logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("prospection")

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = None
    if getattr(app.state, "db", None) is None:
        client = create_mongo_client()
        app.state.db = client[DB_NAME]
        logger.info(f"[CONFIG] Using database: {DB_NAME}")

    await ensure_indexes(app.state.db)
    logger.info(f"🚀 Prospection API v{VERSION} démarrée")

    yield

    if client is not None:
        client.close()
    logger.info("Prospection API arrêtée")


async def prospection_error_handler(request: Request, exc: ProspectionError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Erreur non gérée sur {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Erreur interne du serveur"})


def create_app(database=None) -> FastAPI:
    """
    database: handle MongoDB déjà ouvert (tests). Sinon le client est
    ouvert au démarrage et fermé à l'arrêt.
    """
    app = FastAPI(
        title="Prospection",
        description="Suivi des visites de prospection terrain",
        version=VERSION,
        lifespan=lifespan
    )
    app.state.db = database

    app.add_middleware(
        CORSMiddleware,
        allow_credentials=True,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ProspectionError, prospection_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # ==================== IMPORT DES ROUTES ====================

    from routes import auth, profile, admin

    app.include_router(auth.router, prefix="/api")
    app.include_router(profile.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")

    @app.get("/")
    async def root():
        return {
            "name": "Prospection API",
            "version": VERSION,
            "status": "running",
            "docs": "/docs"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=5000)
