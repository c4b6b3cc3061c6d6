# messenger/infrastructure/security.py
import secrets
from datetime import UTC, datetime, timedelta

import jwt
from jwt import ExpiredSignatureError, InvalidTokenError
from passlib.context import CryptContext

from messenger.config import AppConfig


class SecurityService:
    def __init__(self, config: AppConfig):
        self.config = config
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return self.pwd_context.verify(plain_password, hashed_password)

    def get_password_hash(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def _encode(self, subject: str, key: str, expires_at: datetime, **claims) -> str:
        payload = {"sub": subject, "exp": expires_at, **claims}
        return jwt.encode(payload, key, algorithm=self.config.ALGORITHM)

    def _decode_subject(self, token: str, key: str) -> str | None:
        try:
            payload = jwt.decode(token, key, algorithms=[self.config.ALGORITHM])
        except (ExpiredSignatureError, InvalidTokenError):
            return None
        return payload.get("sub")

    def create_access_token(
        self, subject: str, expires_delta: timedelta | None = None
    ) -> tuple[str, datetime]:
        expire = datetime.now(UTC) + (
            expires_delta or timedelta(minutes=self.config.ACCESS_TOKEN_EXPIRE_MINUTES)
        )
        # nonce keeps tokens issued within the same second distinct
        token = self._encode(
            subject, self.config.SECRET_KEY, expire, nonce=secrets.token_hex(8)
        )
        return token, expire

    def create_refresh_token(self, subject: str) -> tuple[str, datetime]:
        expire = datetime.now(UTC) + timedelta(days=self.config.REFRESH_TOKEN_EXPIRE_DAYS)
        token = self._encode(
            subject, self.config.REFRESH_SECRET_KEY, expire, nonce=secrets.token_hex(8)
        )
        return token, expire

    def decode_access_token(self, token: str) -> str | None:
        return self._decode_subject(token, self.config.SECRET_KEY)

    def decode_refresh_token(self, token: str) -> str | None:
        return self._decode_subject(token, self.config.REFRESH_SECRET_KEY)
