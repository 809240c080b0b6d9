import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from professor_aid import __version__, config
from professor_aid.database import init_db
from professor_aid.exceptions import (
    AuthorizationFiltered,
    ConstraintViolation,
    DependencyMissing,
    IdentityAlreadyExists,
    InvalidCredentials,
    ProfessorAidError,
    ValidationFailed,
)
from professor_aid.routers import atividades as atividades_router
from professor_aid.routers import auth as auth_router
from professor_aid.routers import profile as profile_router
from professor_aid.routers import stats as stats_router
from professor_aid.routers import turmas as turmas_router
from professor_aid.utils.logging import setup_logging

logger = logging.getLogger(__name__)

# enum checks are client input errors, the rest are conflicts with stored rows
_ENUM_CONSTRAINTS = {"turmas_periodo_check", "atividades_tipo_check", "atividades_status_check"}

ERROR_STATUS = {
    IdentityAlreadyExists: status.HTTP_409_CONFLICT,
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    ValidationFailed: 422,
    DependencyMissing: 422,
    AuthorizationFiltered: status.HTTP_403_FORBIDDEN,
}


def status_for(exc: ProfessorAidError) -> int:
    if isinstance(exc, ConstraintViolation):
        if exc.constraint in _ENUM_CONSTRAINTS:
            return 422
        return status.HTTP_409_CONFLICT
    for exc_type, code in ERROR_STATUS.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_400_BAD_REQUEST


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database initialized")
    yield


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(title=config.APP_NAME, version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ProfessorAidError)
    async def professor_aid_error_handler(request: Request, exc: ProfessorAidError):
        return JSONResponse(status_code=status_for(exc), content=exc.to_dict())

    app.include_router(auth_router.router)
    app.include_router(profile_router.router)
    app.include_router(turmas_router.router)
    app.include_router(atividades_router.router)
    app.include_router(stats_router.router)

    @app.get("/health")
    def health():
        return {"status": "ok", "version": __version__}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("professor_aid.main:app", host="127.0.0.1", port=8000, reload=True)
