"""
Caller identification via signed bearer tokens.

A caller token is a compact JWT (HS256) whose ``sub`` claim is the
caller's principal and whose ``exp`` claim bounds its lifetime.  The
signing secret is always passed in explicitly: the server verifies
with the ``secret_key`` of the settings its app was built with (see
``main.create_app``), and ``create_token.py`` signs with the settings
read from the environment.

Write endpoints depend on ``get_current_caller`` and receive the
resolved identity as an explicit ``Caller`` value, which is then
passed to the service layer.  Read endpoints need no identity.
"""

import base64
import hashlib
import hmac
import json
import time
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

_TOKEN_HEADER = {"alg": "HS256", "typ": "JWT"}


@dataclass(frozen=True)
class Caller:
    """The identity on whose behalf a write operation runs."""

    principal: str


def _encode_segment(claims: dict) -> str:
    raw = json.dumps(claims, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _decode_segment(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _signature(signing_input: str, secret_key: str) -> bytes:
    return hmac.new(secret_key.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256).digest()


def create_access_token(principal: str, secret_key: str, lifetime_seconds: int) -> str:
    """Issue a token naming ``principal`` as the caller.

    Parameters
    ----------
    principal : str
        Caller identity to embed as the ``sub`` claim.
    secret_key : str
        Secret the receiving app verifies with.
    lifetime_seconds : int
        Seconds until the token expires.  Zero or negative values
        produce a token that is already expired.

    Returns
    -------
    str
        ``header.claims.signature``, each part base64url encoded.
    """
    claims = {"sub": principal, "exp": int(time.time()) + lifetime_seconds}
    signing_input = f"{_encode_segment(_TOKEN_HEADER)}.{_encode_segment(claims)}"
    signature = base64.urlsafe_b64encode(_signature(signing_input, secret_key)).rstrip(b"=")
    return f"{signing_input}.{signature.decode('ascii')}"


def read_principal(token: str, secret_key: str) -> Optional[str]:
    """Return the caller principal carried by ``token``.

    ``None`` if the token is malformed, signed with another secret,
    expired, or names no principal.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_segment, claims_segment, signature_segment = parts
    expected = _signature(f"{header_segment}.{claims_segment}", secret_key)
    try:
        # Constant-time comparison to prevent timing attacks
        if not hmac.compare_digest(expected, _decode_segment(signature_segment)):
            return None
        claims = json.loads(_decode_segment(claims_segment).decode("utf-8"))
    except ValueError:
        # binascii.Error, UnicodeDecodeError and JSONDecodeError all land here
        return None
    if not isinstance(claims, dict) or not isinstance(claims.get("exp"), int):
        return None
    if claims["exp"] < int(time.time()):
        return None
    principal = claims.get("sub")
    if not isinstance(principal, str) or not principal:
        return None
    return principal


security = HTTPBearer(auto_error=False)


def get_current_caller(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Caller:
    """Dependency that resolves the caller of a write operation.

    Verifies against the ``secret_key`` of the running app's settings.
    Raises HTTP 401 if the ``Authorization`` header is missing or the
    token does not yield a principal.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    principal = read_principal(credentials.credentials, request.app.state.settings.secret_key)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Caller(principal=principal)
