from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from fastapi import status
from jose import jwt, JWTError

from .config import Settings
from .errors import AuthError

ALGORITHM = "HS256"

class TokenService:
    """Issues and verifies the access tokens handed out on task creation."""

    def __init__(self, secret: str, algorithm: str = ALGORITHM, expires_minutes: int = 60):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self.secret = secret
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expires_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.ACCESS_TOKEN_SECRET,
            algorithm=settings.ACCESS_TOKEN_ALGORITHM,
            expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )

    def issue(self, task_id: str) -> str:
        issued_at = datetime.now(timezone.utc)
        to_encode = {
            "taskId": task_id,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise AuthError(status.HTTP_403_FORBIDDEN) from e
