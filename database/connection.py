# backend/database/connection.py
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from pymongo import ASCENDING, AsyncMongoClient
from pymongo.errors import PyMongoError

from exceptions import ConfigurationError, DatabaseConnectionError
from models.user import USERS_COLLECTION

LOG = logging.getLogger("database")


# ============================================================
# 🔧 NOMBRE DE BASE A PARTIR DE LA URI
# ============================================================
def database_name_from_uri(uri: Optional[str]) -> Optional[str]:
    """Devuelve la base indicada en el path de la URI (mongodb://host/<db>) o None."""
    if not uri:
        return None
    try:
        path = urlsplit(uri).path
    except ValueError:
        return None
    name = path.lstrip("/").split("/", 1)[0]
    return name or None


# ============================================================
# 📦 RESULTADO DE LA CONEXIÓN
# ============================================================
@dataclass
class ConnectionResult:
    """Resultado explícito del intento de conexión: handle o error, nunca ambos."""

    client: Optional[AsyncMongoClient] = None
    db: object = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.db is not None


# ============================================================
# 🍃 CONEXIÓN A MONGODB (un solo intento, sin reintentos)
# ============================================================
async def connect_db(uri: Optional[str], db_name: str, timeout_ms: int = 10000) -> ConnectionResult:
    if not uri:
        return ConnectionResult(error=ConfigurationError("MONGO_URI no está definido"))

    client = None
    try:
        client = AsyncMongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
        # el cliente es perezoso: el ping fuerza la selección de servidor
        await client.admin.command("ping")
    except PyMongoError as e:
        if client is not None:
            await client.close()
        return ConnectionResult(error=DatabaseConnectionError(str(e)))

    LOG.info(f"✅ Conectado a MongoDB, base: {db_name}")
    return ConnectionResult(client=client, db=client[db_name])


# ============================================================
# 🗂️ ÍNDICES
# ============================================================
async def ensure_indexes(db) -> None:
    """Crea el índice único de email: la unicidad se garantiza en el almacenamiento."""
    await db[USERS_COLLECTION].create_index([("email", ASCENDING)], unique=True, name="email_unique")
    LOG.info("🗂️ Índice único users.email asegurado")


async def close_db(result: ConnectionResult) -> None:
    if result.client is not None:
        await result.client.close()
        LOG.info("🛑 Conexión a MongoDB cerrada")
