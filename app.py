# backend/app.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from context import AppContext
from middleware.json_body import JSONBodyMiddleware
from routes.health_routes import router as health_router

logger = logging.getLogger("app")


# =====================================================
# * Inicialización de la aplicación
# =====================================================
def create_app(ctx: AppContext) -> FastAPI:
    settings = ctx.settings
    app = FastAPI(
        title=f"{settings.PROJECT_NAME} Backend",
        version=settings.VERSION,
        debug=settings.DEBUG,
    )
    app.state.ctx = ctx

    # =====================================================
    # * CORS abierto + parseo JSON para toda petición
    # =====================================================
    # el último middleware añadido es el más externo: CORS envuelve al JSON
    app.add_middleware(JSONBodyMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =====================================================
    # * Registro de Rutas
    # =====================================================
    app.include_router(health_router, tags=["Health"])
    logger.info("📜 Rutas registradas: GET /")
    return app
