"""Health check endpoint."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.db.database import get_db

router = APIRouter()


@router.get("/health")
def health_check(request: Request, db: Session = Depends(get_db)) -> dict[str, str]:
    """Return database connectivity and tick scheduler status."""
    scheduler = getattr(request.app.state, "tick_scheduler", None)
    ticker = "running" if scheduler is not None and scheduler.running else "stopped"
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "database": "connected", "ticker": ticker}
    except SQLAlchemyError:
        return {"status": "error", "database": "disconnected", "ticker": ticker}
