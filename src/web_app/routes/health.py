from datetime import datetime

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health():
    """Проверка доступности сервиса."""
    return {"status": "ok", "time": datetime.now().isoformat()}
