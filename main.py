# backend/main.py
import asyncio
import logging
import sys

from config import settings
from logging_config import setup_logging
from server import serve

logger = logging.getLogger("main")


# =====================================================
# * Punto de entrada del proceso
# =====================================================
def main() -> None:
    setup_logging(settings.LOG_LEVEL)
    logger.info(f"🚀 {settings.PROJECT_NAME} backend iniciando en modo '{settings.ENV}' ({settings!r})")
    try:
        code = asyncio.run(serve(settings))
    except KeyboardInterrupt:
        # Ctrl+C antes de que uvicorn instale sus handlers (p. ej. conectando)
        code = 0
    if code != 0:
        logger.error("🛑 El servidor no llegó a escuchar peticiones.")
    sys.exit(code)


if __name__ == "__main__":
    main()
