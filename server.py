# backend/server.py
"""Secuencia de arranque: configuración -> MongoDB -> listener HTTP.

El listener solo se abre si la conexión a MongoDB (y la creación de índices)
tuvo éxito. Si falla se registra el error, no se reintenta y se devuelve
código de salida 1. Una parada por SIGINT/SIGTERM termina con código 0 tras
cerrar la conexión.
"""
import contextlib
import logging
import signal
import socket
import threading

import uvicorn
from pymongo.errors import PyMongoError
from uvicorn.server import HANDLED_SIGNALS

from app import create_app
from config import Settings
from context import AppContext
from database.connection import close_db, connect_db, ensure_indexes

logger = logging.getLogger("server")

EXIT_OK = 0
EXIT_DB_FAILURE = 1


class AccountHubServer(uvicorn.Server):
    """uvicorn.Server que no vuelve a lanzar la señal capturada al apagarse.

    uvicorn reenvía SIGTERM al terminar y el handler por defecto mata el
    proceso (143) antes de cerrar MongoDB.
    """

    @contextlib.contextmanager
    def capture_signals(self):
        if threading.current_thread() is not threading.main_thread():
            yield
            return
        original_handlers = {sig: signal.signal(sig, self.handle_exit) for sig in HANDLED_SIGNALS}
        try:
            yield
        finally:
            for sig, handler in original_handlers.items():
                signal.signal(sig, handler)


def bind_listener(config: uvicorn.Config) -> socket.socket:
    return config.bind_socket()


async def serve(settings: Settings) -> int:
    # =====================================================
    # * 1) Conexión a MongoDB (un solo intento)
    # =====================================================
    result = await connect_db(
        settings.MONGO_URI,
        settings.MONGO_DB,
        timeout_ms=settings.MONGO_CONNECT_TIMEOUT_MS,
    )
    if not result.ok:
        logger.error(f"❌ Error conectando a MongoDB: {result.error}")
        return EXIT_DB_FAILURE

    logger.info("✅ MongoDB connected")
    try:
        try:
            await ensure_indexes(result.db)
        except PyMongoError as e:
            logger.error(f"❌ Error creando índices en MongoDB: {e}")
            return EXIT_DB_FAILURE

        # =====================================================
        # * 2) Contexto + app
        # =====================================================
        ctx = AppContext.build(settings, result.db)
        app = create_app(ctx)

        # =====================================================
        # * 3) Listener HTTP
        # =====================================================
        config = uvicorn.Config(
            app,
            host=settings.HOST,
            port=settings.PORT,
            log_level=settings.LOG_LEVEL.lower(),
        )
        server = AccountHubServer(config)
        sock = bind_listener(config)
        logger.info(f"🌍 Server running on port {settings.PORT}")
        await server.serve(sockets=[sock])
    finally:
        await close_db(result)
    return EXIT_OK
