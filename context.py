# backend/context.py
from dataclasses import dataclass

from fastapi import Request

from config import Settings
from repositories.user_repository import UserRepository


@dataclass
class AppContext:
    """Estado de proceso creado una sola vez tras conectar a MongoDB.

    Se cuelga de app.state.ctx y se pasa a quien lo necesite, en lugar de
    importar la base como global.
    """

    settings: Settings
    db: object
    users: UserRepository

    @classmethod
    def build(cls, settings: Settings, db) -> "AppContext":
        return cls(settings=settings, db=db, users=UserRepository(db))


def get_context(request: Request) -> AppContext:
    """Dependencia FastAPI: Depends(get_context)."""
    return request.app.state.ctx
