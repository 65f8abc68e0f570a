"""
Point d'entrée principal de l'application Roster (enseignants et leurs élèves).
Démarrage : uvicorn roster.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

import roster.models  # noqa: F401 — enregistre tous les modèles dans Base.metadata avant les routers
from roster.config import settings
from roster.database import init_db
from roster.errors import DestroyFailed, MalformedBody, ParameterMissing, RecordNotFound
from roster.routers import students, teachers
from roster.web import render, wants_json

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie de l'application : crée les tables teachers et students au démarrage."""
    init_db()
    yield


app = FastAPI(
    title="Roster",
    description="Gestion des enseignants et de leurs élèves",
    version=VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# Cookie de session signé : transporte les messages flash entre redirection et page suivante
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    session_cookie=settings.SESSION_COOKIE,
    https_only=settings.ENV == "production",
)


app.include_router(teachers.router)
app.include_router(students.router)


@app.exception_handler(RecordNotFound)
async def record_not_found_handler(request: Request, exc: RecordNotFound):
    """Identifiant de l'URL inconnu : 404, quelle que soit l'action demandée."""
    logger.info("%s %s : %s", request.method, request.url.path, exc)
    if wants_json(request):
        return JSONResponse(status_code=404, content={"detail": str(exc)})
    return render(request, "not_found.html", {"message": str(exc)}, status_code=404)


@app.exception_handler(DestroyFailed)
async def destroy_failed_handler(request: Request, exc: DestroyFailed):
    logger.warning("Suppression refusée %s : %s", request.url.path, exc)
    if wants_json(request):
        return JSONResponse(status_code=409, content={"detail": str(exc)})
    return render(request, "conflict.html", {"message": str(exc)}, status_code=409)


@app.exception_handler(MalformedBody)
@app.exception_handler(ParameterMissing)
async def bad_request_handler(request: Request, exc: Exception) -> JSONResponse:
    """Corps de requête inexploitable : 400, levée seulement une fois l'enseignant résolu."""
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées : la trace complète part dans les logs,
    le client ne reçoit qu'un message générique.
    """
    logger.error("Exception non gérée : %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal error occurred."},
    )


@app.get("/up", tags=["Health"])
def health_check():
    """Vérifie que l'application est opérationnelle."""
    return {"status": "ok", "service": "Roster", "version": VERSION}
