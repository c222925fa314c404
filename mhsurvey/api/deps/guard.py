# mhsurvey/api/deps/guard.py
from typing import Optional

from fastapi import Depends, HTTPException, status

from mhsurvey.core.policies import (
    HOME_URL,
    LOGIN_URL,
    ROUTE_POLICIES,
    AccessDecision,
    RequestContext,
    evaluate_access,
)
from mhsurvey.core.security import get_current_user_optional
from mhsurvey.models.user import User


def guard(route_id: str):
    """
    Dependency que aplica ROUTE_POLICIES[route_id]:
    sin sesión -> 401 con login_url, rol no permitido -> 403 con home_url.
    Devuelve el usuario autenticado.
    """
    policy = ROUTE_POLICIES[route_id]  # KeyError al importar si el id no existe

    def dependency(user: Optional[User] = Depends(get_current_user_optional)) -> Optional[User]:
        decision = evaluate_access(RequestContext(user), policy)
        if decision == AccessDecision.REDIRECT_LOGIN:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"message": "Não autenticado", "login_url": LOGIN_URL},
                headers={"WWW-Authenticate": "Bearer"},
            )
        if decision == AccessDecision.ACCESS_DENIED:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"message": "Acesso negado", "home_url": HOME_URL},
            )
        return user

    return dependency
