# backend/config.py
import os
from dotenv import load_dotenv
from pathlib import Path

from exceptions import ConfigurationError
from database.connection import database_name_from_uri

# ============================================================
# 🌍 DETECTAR ENTORNO Y CARGAR .env CORRESPONDIENTE
# ============================================================
ENV = os.getenv("ENV", "development")

env_file = ".env.production" if ENV == "production" else ".env.development"
dotenv_path = Path(__file__).resolve().parent / env_file
load_dotenv(dotenv_path)

DEFAULT_PORT = 5000
DEFAULT_DB_NAME = "accounthub"


def _int_env(environ, name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} debe ser un entero, recibido: {raw!r}")


# ============================================================
# ⚙️ CONFIGURACIÓN GENERAL
# ============================================================
class Settings:
    def __init__(self, environ=None):
        env = os.environ if environ is None else environ

        self.PROJECT_NAME: str = env.get("PROJECT_NAME", "AccountHub")
        self.VERSION: str = env.get("VERSION", "1.0")
        self.ENV: str = env.get("ENV", ENV)
        self.DEBUG: bool = self.ENV == "development"
        self.LOG_LEVEL: str = env.get("LOG_LEVEL", "INFO").upper()

        # 🔹 Servidor HTTP
        self.HOST: str = env.get("HOST", "0.0.0.0")
        self.PORT: int = _int_env(env, "PORT", DEFAULT_PORT)
        self.ALLOWED_ORIGINS: list = env.get("ALLOWED_ORIGINS", "*").split(",")

        # 🔹 Mongo (sin valor por defecto: se valida al conectar)
        self.MONGO_URI = env.get("MONGO_URI") or None
        self.MONGO_DB: str = (
            env.get("MONGO_DB")
            or database_name_from_uri(self.MONGO_URI)
            or DEFAULT_DB_NAME
        )
        self.MONGO_CONNECT_TIMEOUT_MS: int = _int_env(env, "MONGO_CONNECT_TIMEOUT_MS", 10000)

    def __repr__(self):
        # nunca exponer la URI (puede llevar credenciales)
        return (
            f"Settings(env={self.ENV!r}, host={self.HOST!r}, port={self.PORT}, "
            f"mongo_db={self.MONGO_DB!r}, mongo_uri_set={self.MONGO_URI is not None})"
        )


settings = Settings()
