"""Credential store: user registration and password verification."""

import logging

from passlib.context import CryptContext
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from filevault.errors import ServiceError, conflict_error, validation_error
from filevault.models.user import User

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt ignores everything past this many bytes
MAX_PASSWORD_BYTES = 72


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class CredentialStore:
    """Service for user identity and password checks."""

    def __init__(self, db: Session):
        self.db = db

    def register(self, username: str, email: str, password: str) -> User | ServiceError:
        """Create a new user.

        Returns the persisted user, or a validation/conflict error. Username
        and email uniqueness is checked with a single query; a concurrent
        insert that gets past it is caught by the unique constraints.
        """
        if _is_blank(username) or _is_blank(email) or _is_blank(password):
            return validation_error("All fields are required.")

        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            return validation_error(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")

        if self._identity_taken(username, email):
            return conflict_error("Username or email is already in use.")

        user = User(username=username, email=email, password_hash=get_password_hash(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Registration for '{username}' lost a race on a unique constraint")
            return conflict_error("Username or email is already in use.")

        self.db.refresh(user)
        logger.info(f"Registered user {user.id} ('{user.username}')")
        return user

    def verify_credentials(self, username: str, password: str) -> User | None:
        """Authenticate a user by username and password.

        Unknown usernames and wrong passwords both return None.
        """
        if _is_blank(username) or not password:
            return None

        user = self.get_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            logger.info("Rejected login attempt")
            return None
        return user

    def get_by_username(self, username: str) -> User | None:
        """Get a user by username."""
        return self.db.query(User).filter(User.username == username).first()

    def _identity_taken(self, username: str, email: str) -> bool:
        existing = (
            self.db.query(User.id)
            .filter(or_(User.username == username, User.email == email))
            .first()
        )
        return existing is not None
