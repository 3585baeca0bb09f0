# backend/routes/health_routes.py
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()

HEALTH_MESSAGE = "Server is running"


# ------------------------------------------------------------
# 🔹 Ruta raíz (liveness)
# ------------------------------------------------------------
@router.get("/", response_class=PlainTextResponse, summary="Ruta raíz del backend")
def root():
    return HEALTH_MESSAGE
