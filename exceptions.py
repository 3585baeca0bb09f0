# backend/exceptions.py
"""Excepciones propias del backend.

Todas heredan de AccountHubError para poder capturarlas en bloque en el
arranque o en futuros handlers HTTP.
"""
from typing import List, Optional


class AccountHubError(Exception):
    """Base de todos los errores del backend."""

    pass


class ConfigurationError(AccountHubError):
    """Valor de configuración inválido o ausente."""

    pass


class DatabaseConnectionError(AccountHubError):
    """No se pudo conectar con MongoDB (host inaccesible, credenciales, timeout)."""

    pass


class UserValidationError(AccountHubError):
    """Escritura de usuario rechazada por el esquema.

    Args:
        errors: lista de dicts {"field": ..., "message": ...}.
    """

    def __init__(self, errors: List[dict], message: Optional[str] = None):
        self.errors = errors
        if message is None:
            message = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.__class__.__name__, "detail": self.errors}


class DuplicateEmailError(UserValidationError):
    """Ya existe un usuario con ese email (índice único en la colección)."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(
            [{"field": "email", "message": f"El email '{email}' ya está registrado"}]
        )


class UserNotFoundError(AccountHubError):
    """El usuario solicitado no existe."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"Usuario '{user_id}' no encontrado")
