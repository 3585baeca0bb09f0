# backend/models/user.py
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from exceptions import UserValidationError

USERS_COLLECTION = "users"

# mensajes de "campo requerido" por campo
REQUIRED_MESSAGES = {
    "name": "Please enter your name",
    "email": "Email is required",
    "password": "Password is required",
}


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


def _require_text(field: str, value: Any) -> Any:
    # igual que un "required" de mongoose: solo None y "" cuentan como ausentes
    if value is None or value == "":
        raise ValueError(REQUIRED_MESSAGES[field])
    return value


# ------------------------------------------------------------
# 🔹 Alta de usuario
# ------------------------------------------------------------
class UserCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # validate_default: la ausencia también pasa por el validador
    name: Optional[str] = Field(None, validate_default=True)
    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)  # se guarda tal cual llega
    role: Role = Role.USER

    @field_validator("name", "email", "password", mode="before")
    @classmethod
    def check_not_empty(cls, v, info):
        return _require_text(info.field_name, v)

    @field_validator("role", mode="before")
    @classmethod
    def default_role(cls, v):
        # role explícitamente nulo equivale a omitido
        return Role.USER if v is None else v


# ------------------------------------------------------------
# 🔹 Cambios parciales
# ------------------------------------------------------------
class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[Role] = None

    @field_validator("name", "email", "password", mode="before")
    @classmethod
    def check_not_empty(cls, v, info):
        # ausente está permitido; presente pero vacío no
        return _require_text(info.field_name, v)

    @field_validator("role", mode="before")
    @classmethod
    def reject_null_role(cls, v):
        # ausente deja el rol como está; null explícito no es un rol
        if v is None:
            raise ValueError(f"'{v}' no es un rol válido (admin, user)")
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, mode="json")


# ------------------------------------------------------------
# 🔹 Documento almacenado
# ------------------------------------------------------------
class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    id: Optional[str] = Field(None, alias="_id")
    name: str
    email: str
    password: str
    role: Role = Role.USER
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @field_validator("id", mode="before")
    @classmethod
    def id_to_str(cls, v):
        return str(v) if isinstance(v, ObjectId) else v

    @classmethod
    def from_mongo(cls, doc: Optional[dict]) -> Optional["User"]:
        if not doc:
            return None
        return cls.model_validate(doc)


def _to_validation_error(exc: ValidationError) -> UserValidationError:
    errors = []
    for err in exc.errors():
        field = str(err["loc"][0]) if err.get("loc") else "__root__"
        message = err.get("msg", "invalid value")
        if err.get("type") == "value_error":
            # pydantic antepone "Value error, " a los ValueError propios
            message = str(err.get("ctx", {}).get("error", message))
        elif field == "role":
            message = f"'{err.get('input')}' no es un rol válido (admin, user)"
        errors.append({"field": field, "message": message})
    return UserValidationError(errors)


def validate_user(data: dict) -> UserCreate:
    """Valida un alta de usuario sin tocar la base de datos."""
    try:
        return UserCreate.model_validate(data)
    except ValidationError as e:
        raise _to_validation_error(e) from e


def validate_user_update(data: dict) -> UserUpdate:
    try:
        return UserUpdate.model_validate(data)
    except ValidationError as e:
        raise _to_validation_error(e) from e
