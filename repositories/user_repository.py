# backend/repositories/user_repository.py
from datetime import datetime, timezone
from typing import List, Optional
import logging

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from exceptions import DuplicateEmailError, UserNotFoundError
from models.user import USERS_COLLECTION, User, validate_user, validate_user_update

LOG = logging.getLogger("repositories.user")


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ------------------------------------------------------------
# 🔹 Serialización segura de usuario
# ------------------------------------------------------------
def serialize_user(user: Optional[User]) -> Optional[dict]:
    """Convierte el usuario a dict JSON sin la contraseña."""
    if user is None:
        return None
    data = user.model_dump(mode="json")
    data.pop("password", None)  # nunca exponer password
    return data


class UserRepository:
    """Acceso a la colección `users` de la base del contexto.

    La unicidad de email la impone el índice único (ver database.ensure_indexes),
    no una consulta previa: dos altas concurrentes no pueden colarse.
    """

    def __init__(self, db):
        self.collection = db[USERS_COLLECTION]

    # ------------------------------------------------------------
    # 🔹 Crear usuario
    # ------------------------------------------------------------
    async def create_user(self, data: dict) -> User:
        user = validate_user(data)
        now = _now()
        doc = user.model_dump(mode="json")
        doc["createdAt"] = now
        doc["updatedAt"] = now
        try:
            result = await self.collection.insert_one(doc)
        except DuplicateKeyError:
            LOG.warning(f"⚠️ Email duplicado: {user.email}")
            raise DuplicateEmailError(user.email)
        doc["_id"] = result.inserted_id
        LOG.info(f"✅ Usuario creado con ID {result.inserted_id}")
        return User.from_mongo(doc)

    # ------------------------------------------------------------
    # 🔹 Consultas
    # ------------------------------------------------------------
    async def get_user_by_email(self, email: str) -> Optional[User]:
        return User.from_mongo(await self.collection.find_one({"email": email}))

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        try:
            oid = ObjectId(user_id)
        except (InvalidId, TypeError):
            LOG.warning(f"ID inválido: {user_id}")
            return None
        return User.from_mongo(await self.collection.find_one({"_id": oid}))

    async def list_users(self) -> List[User]:
        docs = await self.collection.find().to_list(length=None)
        return [User.from_mongo(doc) for doc in docs]

    # ------------------------------------------------------------
    # 🔹 Actualizar usuario (sella updatedAt)
    # ------------------------------------------------------------
    async def update_user(self, user_id: str, data: dict) -> User:
        changes = validate_user_update(data).changes()
        try:
            oid = ObjectId(user_id)
        except (InvalidId, TypeError):
            raise UserNotFoundError(user_id)

        changes["updatedAt"] = _now()
        try:
            doc = await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            LOG.warning(f"⚠️ Email duplicado en actualización: {changes.get('email')}")
            raise DuplicateEmailError(changes.get("email"))

        if doc is None:
            raise UserNotFoundError(user_id)
        LOG.info(f"✅ Usuario actualizado: {user_id}")
        return User.from_mongo(doc)
