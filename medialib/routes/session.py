import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from medialib.auth import require_session
from medialib.config import MEDIA_PASSWORD
from medialib.library import login_limiter, sessions
from medialib.models import LoginPayload
from medialib.security import check_password

router = APIRouter(prefix="/api", tags=["session"])
logger = logging.getLogger(__name__)


@router.post("/login")
def api_login(payload: LoginPayload, request: Request):
    ip = request.client.host if request.client else "unknown"
    if not login_limiter.allow(ip):
        logger.warning("login throttled for %s", ip)
        raise HTTPException(status_code=429, detail="too many login attempts")
    if not check_password(payload.password, MEDIA_PASSWORD):
        logger.warning("failed login from %s", ip)
        raise HTTPException(status_code=401, detail="invalid password")
    login_limiter.reset(ip)
    return {"success": True, "sessionToken": sessions.create()}


@router.post("/logout")
def api_logout(token: str = Depends(require_session)):
    sessions.revoke(token)
    return {"success": True}
