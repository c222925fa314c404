# mhsurvey/core/policies.py
"""
Políticas de acceso por ruta.

Cada ruta protegida declara en ``ROUTE_POLICIES`` qué roles la pueden ver;
``evaluate_access`` decide en cada llamada (sin caché) a partir de la sesión.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Protocol

from mhsurvey.models.user import Role, User

LOGIN_URL = "/api/v1/auth/login"
HOME_URL = "/"


class AccessDecision(str, Enum):
    LOADING = "loading"
    REDIRECT_LOGIN = "redirect_login"
    ACCESS_DENIED = "access_denied"
    ALLOW = "allow"


@dataclass(frozen=True)
class RoutePolicy:
    roles: FrozenSet[Role] = frozenset()  # vacío = cualquier usuario autenticado
    require_auth: bool = True


ALL_ROLES = frozenset(Role)
ADMIN = frozenset({Role.ADMIN})
MANAGER = frozenset({Role.MANAGER})
EMPLOYEE = frozenset({Role.EMPLOYEE})

ROUTE_POLICIES: Dict[str, RoutePolicy] = {
    "public": RoutePolicy(require_auth=False),
    "authenticated": RoutePolicy(),
    "home": RoutePolicy(ALL_ROLES),
    "admin.companies": RoutePolicy(ADMIN),
    "admin.employees": RoutePolicy(ADMIN),
    "admin.questions": RoutePolicy(ADMIN),
    "admin.surveys": RoutePolicy(ADMIN),
    "admin.videos": RoutePolicy(ADMIN),
    "admin.payments": RoutePolicy(ADMIN),
    "admin.settings": RoutePolicy(ADMIN),
    "reports": RoutePolicy(frozenset({Role.ADMIN, Role.MANAGER})),
    "manager.dashboard": RoutePolicy(MANAGER),
    "manager.reports": RoutePolicy(MANAGER),
    "employee.dashboard": RoutePolicy(EMPLOYEE),
    "employee.survey": RoutePolicy(EMPLOYEE),
    "employee.videos": RoutePolicy(EMPLOYEE),
    "employee.gamification": RoutePolicy(EMPLOYEE),
}


class SessionLike(Protocol):
    is_loading: bool

    @property
    def is_authenticated(self) -> bool: ...

    def has_any_role(self, roles: Iterable[Role]) -> bool: ...


@dataclass
class RequestContext:
    """Vista de sesión para un request HTTP: el usuario ya viene del token."""
    user: Optional[User]
    is_loading: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def has_any_role(self, roles: Iterable[Role]) -> bool:
        return self.user is not None and self.user.role in set(roles)


def evaluate_access(session: SessionLike, policy: RoutePolicy) -> AccessDecision:
    if not policy.require_auth:
        return AccessDecision.ALLOW
    if session.is_loading:
        return AccessDecision.LOADING
    if not session.is_authenticated:
        return AccessDecision.REDIRECT_LOGIN
    if policy.roles and not session.has_any_role(policy.roles):
        return AccessDecision.ACCESS_DENIED
    return AccessDecision.ALLOW
