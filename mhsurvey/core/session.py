# mhsurvey/core/session.py
"""
Sesión de autenticación.

``AuthSession`` guarda el token y el usuario (JSON) en un ``KeyValueStorage``
bajo las claves ``auth_token`` y ``auth_user``. Al restaurar, el token se
valida (JWT) antes de considerar la sesión autenticada.

    session = AuthSession(store)
    session.restore()
    await session.login("admin@empresa.com", "admin123")
    session.has_role(Role.ADMIN)  # True
    session.logout()
"""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Dict, Iterable, Optional, Protocol

from pydantic import ValidationError as PydanticValidationError

from mhsurvey.core.config import settings
from mhsurvey.core.exceptions import InvalidCredentialsError, InvalidTokenError
from mhsurvey.core.security import authenticate, decode_token, token_for
from mhsurvey.db.store import MemoryStore
from mhsurvey.models.user import Role, User

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth_token"
USER_KEY = "auth_user"


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """Storage en memoria (equivalente a localStorage)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self):
        return list(self._data)


class SessionValidator(Protocol):
    def validate(self, token: str, user: User) -> bool: ...


class JwtSessionValidator:
    """Token válido = firma y expiración correctas y 'sub' igual al usuario guardado."""

    def validate(self, token: str, user: User) -> bool:
        try:
            payload = decode_token(token)
        except InvalidTokenError:
            return False
        return payload.get("sub") == user.id


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class AuthSession:
    def __init__(
        self,
        store: MemoryStore,
        storage: Optional[KeyValueStorage] = None,
        validator: Optional[SessionValidator] = None,
        delay_ms: Optional[int] = None,
    ):
        self.store = store
        self.storage = storage if storage is not None else MemoryStorage()
        self.validator = validator or JwtSessionValidator()
        self.delay_ms = settings.MOCK_DELAY_MS if delay_ms is None else delay_ms

        self.state = SessionState.UNAUTHENTICATED
        self.is_loading = True
        self.user: Optional[User] = None
        self.token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.state == SessionState.AUTHENTICATED and self.user is not None

    def _clear(self) -> None:
        self.storage.remove(TOKEN_KEY)
        self.storage.remove(USER_KEY)
        self.user = None
        self.token = None
        self.state = SessionState.UNAUTHENTICATED

    def restore(self) -> bool:
        """Recupera la sesión guardada; si algo no cuadra se limpia todo."""
        token = self.storage.get(TOKEN_KEY)
        raw_user = self.storage.get(USER_KEY)
        try:
            if not token or not raw_user:
                self._clear()
                return False
            try:
                user = User.model_validate_json(raw_user)
            except PydanticValidationError:
                logger.warning("Usuário salvo inválido; limpando sessão")
                self._clear()
                return False
            if not self.validator.validate(token, user):
                logger.info("Token salvo inválido ou expirado; limpando sessão")
                self._clear()
                return False

            self.user, self.token = user, token
            self.state = SessionState.AUTHENTICATED
            return True
        finally:
            self.is_loading = False

    async def login(self, email: str, password: str) -> User:
        """Si las credenciales fallan, la sesión previa (si había) queda intacta."""
        previous = self.state
        self.state = SessionState.AUTHENTICATING
        if self.delay_ms > 0:
            await asyncio.sleep(self.delay_ms / 1000)
        try:
            user = authenticate(self.store, email, password)
        except InvalidCredentialsError:
            logger.info("Login falhou para %s", email)
            self.state = previous
            raise

        token = token_for(user)
        self.storage.set(TOKEN_KEY, token)
        self.storage.set(USER_KEY, user.model_dump_json(by_alias=True))
        self.user, self.token = user, token
        self.state = SessionState.AUTHENTICATED
        self.is_loading = False
        logger.info("Login: %s (%s)", user.email, user.role.value)
        return user

    def logout(self) -> None:
        if self.user is not None:
            logger.info("Logout: %s", self.user.email)
        self._clear()

    def has_role(self, role: Role) -> bool:
        return self.is_authenticated and self.user.role == role

    def has_any_role(self, roles: Iterable[Role]) -> bool:
        return self.is_authenticated and self.user.role in set(roles)
