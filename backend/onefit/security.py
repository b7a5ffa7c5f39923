from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Sequence
from jose import jwt
from jose.exceptions import JWTError
from onefit.settings import Settings, get_settings

@dataclass(frozen=True)
class Identity:
    """Who the identity provider says the caller is."""
    uid: str
    email: Optional[str] = None
    name: Optional[str] = None

class TokenVerifier:
    """
    Verify bearer tokens issued by the identity provider.

    Raises ``ExpiredSignatureError`` for expired tokens and ``JWTError`` for
    anything else that does not check out.
    """

    def __init__(self, secret_key: str, algorithms: Sequence[str], audience: Optional[str] = None):
        self.secret_key = secret_key
        self.algorithms = list(algorithms)
        self.audience = audience

    @classmethod
    def from_settings(cls, s: Optional[Settings] = None) -> "TokenVerifier":
        s = s or get_settings()
        return cls(s.SECRET_KEY, [s.ALGORITHM], s.TOKEN_AUDIENCE)

    def verify(self, token: str) -> Identity:
        payload = jwt.decode(
            token,
            self.secret_key,
            algorithms=self.algorithms,
            audience=self.audience,
            options={
                "verify_signature": True,
                "verify_exp": True,
                "verify_aud": self.audience is not None,
            },
        )
        # Hard-require the claims we rely on
        if "exp" not in payload:
            raise JWTError("Missing exp")
        sub = payload.get("sub")
        if not sub:
            raise JWTError("Missing sub")
        return Identity(uid=str(sub), email=payload.get("email"), name=payload.get("name"))

def create_access_token(
    sub: str,
    *,
    expires_minutes: Optional[int] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> str:
    """Mint a token the default verifier accepts (local dev and tests)."""
    s = get_settings()
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=expires_minutes if expires_minutes is not None else s.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload: Dict[str, Any] = {
        "sub": sub,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    if s.TOKEN_AUDIENCE:
        payload["aud"] = s.TOKEN_AUDIENCE
    if extra:
        payload.update(extra)
    return jwt.encode(payload, s.SECRET_KEY, algorithm=s.ALGORITHM)
