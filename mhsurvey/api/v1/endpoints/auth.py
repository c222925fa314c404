# mhsurvey/api/v1/endpoints/auth.py
import logging

from fastapi import APIRouter, Depends

from mhsurvey.api.deps.guard import guard
from mhsurvey.core.session import AuthSession
from mhsurvey.db.store import MemoryStore, get_store
from mhsurvey.models.user import Role, User
from mhsurvey.schemas.auth import HomeOut, LoginIn, TokenOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

HOME_BY_ROLE = {
    Role.ADMIN: "/admin",
    Role.MANAGER: "/manager/dashboard",
    Role.EMPLOYEE: "/employee/dashboard",
}


@router.post("/auth/login", response_model=TokenOut)
async def login(data: LoginIn, store: MemoryStore = Depends(get_store)):
    session = AuthSession(store)
    user = await session.login(data.email, data.password)
    return TokenOut(access_token=session.token, user=user)


@router.get("/auth/me", response_model=User)
def me(current_user: User = Depends(guard("authenticated"))):
    return current_user


@router.post("/auth/logout")
def logout(current_user: User = Depends(guard("authenticated"))):
    # JWT sin estado en el servidor: el cliente descarta el token
    logger.info("Logout: %s", current_user.email)
    return {"ok": True}


@router.get("/me/home", response_model=HomeOut)
def home(current_user: User = Depends(guard("home"))):
    return HomeOut(user=current_user, home=HOME_BY_ROLE[current_user.role])
