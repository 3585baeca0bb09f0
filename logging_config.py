# backend/logging_config.py
import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


# =====================================================
# * Configuración de Logging global
# =====================================================
def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
