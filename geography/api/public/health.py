from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from geography.core.config import settings
from geography.db.session import get_db


router = APIRouter(prefix="/healthz", tags=["health"])


@router.get("")
def healthz(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "ok", "service": settings.app_name}
