# onefit/deps/auth.py
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from jose.exceptions import ExpiredSignatureError, JWTError

from onefit.db import get_db
from onefit.models import User
from onefit.repositories.user_repo import UserRepository
from onefit.security import TokenVerifier

# Exposes Bearer auth in Swagger; tokens come from the identity provider
bearer_scheme = HTTPBearer(auto_error=False)

def get_token_verifier(request: Request) -> TokenVerifier:
    verifier = getattr(request.app.state, "token_verifier", None)
    if verifier is None:
        verifier = TokenVerifier.from_settings()
        request.app.state.token_verifier = verifier
    return verifier

def _unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )

def _resolve(db: Session, verifier: TokenVerifier, token: str) -> User:
    try:
        identity = verifier.verify(token)
    except ExpiredSignatureError:
        raise _unauthorized("Token expired")
    except JWTError:
        raise _unauthorized()
    return UserRepository(db).get_or_create(
        external_uid=identity.uid, email=identity.email, name=identity.name
    )

def get_current_user(
    db: Session = Depends(get_db),
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> User:
    if creds is None or not creds.credentials:
        raise _unauthorized()
    return _resolve(db, verifier, creds.credentials)

def get_optional_user(
    db: Session = Depends(get_db),
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Optional[User]:
    """Anonymous callers get None; a bad token is still rejected."""
    if creds is None or not creds.credentials:
        return None
    return _resolve(db, verifier, creds.credentials)
