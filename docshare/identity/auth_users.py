"""
===============================================================================
CRC — identity/auth_users.py
===============================================================================

Módulo:
    Identidad del caller a partir de un access token JWT

Responsabilidades:
    - Verificar tokens HS256 (firma, exp) y leer el user_id del claim `sub`.
    - Encontrar el token en `Authorization: Bearer ...` o en la cookie
      configurada (el header gana).
    - Confirmar que el usuario exista en el directorio.
    - Entregar un DocumentActor explícito a los routers (require_user).

Colaboradores:
    - PyJWT
    - crosscutting.config (secreto, nombre de cookie)
    - crosscutting.error_responses.unauthorized
    - container.get_user_directory

Notas:
    - Este servicio no emite tokens.
    - Nunca se loguea el token ni el secreto.
===============================================================================
"""

from __future__ import annotations

from typing import Awaitable, Callable
from uuid import UUID

import jwt
from fastapi import Header, Request

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import unauthorized
from ..crosscutting.logger import logger
from ..domain.document_policy import DocumentActor

JWT_ALGORITHM = "HS256"
REQUIRED_CLAIMS = ("sub", "exp")
DEFAULT_ACCESS_TOKEN_COOKIE = "access_token"

MSG_MISSING_TOKEN = "Falta token Bearer."
MSG_EXPIRED_TOKEN = "Token expirado."
MSG_INVALID_TOKEN = "Token inválido."


def decode_access_token(token: str, secret: str | None = None) -> UUID:
    """user_id del token, o 401 si no verifica."""
    key = get_settings().jwt_secret if secret is None else secret
    try:
        claims = jwt.decode(
            token,
            key,
            algorithms=[JWT_ALGORITHM],
            options={"require": list(REQUIRED_CLAIMS)},
        )
        return UUID(str(claims["sub"]))
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized(MSG_EXPIRED_TOKEN) from exc
    except (jwt.InvalidTokenError, ValueError) as exc:
        raise unauthorized(MSG_INVALID_TOKEN) from exc


def bearer_token(authorization: str | None) -> str | None:
    scheme, _, value = (authorization or "").strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return value.strip() or None


def token_from_request(request: Request, authorization: str | None) -> str | None:
    token = bearer_token(authorization)
    if token:
        return token
    cookie = get_settings().jwt_cookie_name.strip() or DEFAULT_ACCESS_TOKEN_COOKIE
    return request.cookies.get(cookie) or None


def get_current_actor(token: str) -> DocumentActor:
    from ..container import get_user_directory

    user_id = decode_access_token(token)
    if get_user_directory().get_user_by_id(user_id) is None:
        logger.warning("Token de usuario inexistente", extra={"user_id": str(user_id)})
        raise unauthorized(MSG_INVALID_TOKEN)
    return DocumentActor(user_id=user_id)


def require_user() -> Callable[..., Awaitable[DocumentActor]]:
    """Dependencia FastAPI: 401 salvo token válido de un usuario existente."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(default=None),
    ) -> DocumentActor:
        token = token_from_request(request, authorization)
        if token is None:
            raise unauthorized(MSG_MISSING_TOKEN)
        return get_current_actor(token)

    return dependency
