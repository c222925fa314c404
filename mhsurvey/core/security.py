# mhsurvey/core/security.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from mhsurvey.core.config import settings
from mhsurvey.core.exceptions import InvalidCredentialsError, InvalidTokenError
from mhsurvey.db.store import MemoryStore, get_store
from mhsurvey.models.user import User

logger = logging.getLogger(__name__)

# Solo para docs/Swagger; sin auto_error para que el guard decida el 401
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def create_access_token(claims: dict[str, Any], expires_minutes: int | None = None) -> str:
    """JWT firmado con 'iat' (epoch int) y 'exp'; 'sub' siempre como str."""
    minutes = settings.JWT_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    issued = datetime.now(timezone.utc)

    payload = dict(claims)
    if "sub" in payload:
        payload["sub"] = str(payload["sub"])
    payload["iat"] = int(issued.timestamp())
    payload["exp"] = issued + timedelta(minutes=minutes)  # PyJWT acepta datetime tz-aware
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """Valida firma y expiración; 'exp' e 'iat' son obligatorios."""
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat"], "verify_exp": True},
            leeway=5,  # pequeño margen por skew de reloj
        )
    except jwt.ExpiredSignatureError:
        raise InvalidTokenError("Token expirado") from None
    except jwt.InvalidTokenError:
        raise InvalidTokenError("Token inválido") from None


def token_for(user: User) -> str:
    return create_access_token({"sub": user.id, "role": user.role.value, "email": user.email})


def authenticate(store: MemoryStore, email: str, password: str) -> User:
    """Busca la cuenta por e-mail (sin distinguir mayúsculas) y compara la contraseña tal cual."""
    account = store.accounts.get((email or "").strip().lower())
    if account is None or account.password != password or not account.user.is_active:
        raise InvalidCredentialsError()
    return account.user


def user_from_token(store: MemoryStore, token: str) -> User:
    payload = decode_token(token)
    sub = payload.get("sub")
    if not sub:
        raise InvalidTokenError("Token sem sujeito")

    user = next((a.user for a in store.accounts.values() if a.user.id == sub), None)
    if user is None or not user.is_active:
        raise InvalidTokenError("Usuário não encontrado ou inativo")
    return user


def get_current_user_optional(
    token: Optional[str] = Depends(oauth2_scheme),
    store: MemoryStore = Depends(get_store),
) -> Optional[User]:
    """
    Usuario del bearer token, o None si no hay token o no es válido.
    El token se valida en cada request (firma, expiración y usuario activo).
    """
    if not token:
        return None
    try:
        return user_from_token(store, token)
    except InvalidTokenError as e:
        logger.info("Token rejeitado: %s", e.message)
        return None

