"""Token service for issuing and validating JWT session tokens."""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from filevault.config import Settings
from filevault.models.user import User


class TokenService:
    """Issues and validates signed, time-limited bearer tokens.

    The signing configuration is passed in at construction and fixed for the
    lifetime of the instance. Tokens are stateless: there is no revocation
    list, so a token stays valid until its ``exp`` claim.
    """

    def __init__(
        self,
        secret: str,
        issuer: str,
        audience: str,
        algorithm: str = "HS256",
        expiration_minutes: int = 1440,
    ):
        self.secret = secret
        self.issuer = issuer
        self.audience = audience
        self.algorithm = algorithm
        self.expiration_minutes = expiration_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        """Build a token service from application settings."""
        return cls(
            secret=settings.jwt_secret,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            algorithm=settings.jwt_algorithm,
            expiration_minutes=settings.jwt_expiration_minutes,
        )

    def issue(self, user: User, expires_delta: timedelta | None = None) -> str:
        """Create a signed token for the given user."""
        now = datetime.now(UTC)
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.expiration_minutes)

        to_encode = {
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "exp": now + expires_delta,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def validate(self, token: str) -> int | None:
        """Return the user id a token was issued for, or None if it is not valid.

        Signature, issuer, audience and expiry are all checked with no leeway.
        The reason for a rejection is deliberately not reported.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"leeway": 0, "require_exp": True, "require_sub": True},
            )
        except JWTError:
            return None

        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            return None
