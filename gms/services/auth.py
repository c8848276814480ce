"""Authentication service for JWT, password handling and user accounts."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from gms.config import get_settings
from gms.exceptions import DuplicateError, PersistenceError
from gms.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, email: str) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def normalize_email(email: str) -> str:
    return email.lower().strip()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def _commit_user(db: Session, user: User, action: str) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateError("Email already registered") from None
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to {action}: {e}")
        raise PersistenceError(f"Failed to {action}") from e
    db.refresh(user)


def create_user(
    db: Session,
    email: str,
    password: str,
    username: str,
    full_name: str | None = None,
    diet_preference: str = "None",
) -> User:
    """Create a new user. Emails are unique across all users."""
    if get_user_by_email(db, email):
        raise DuplicateError("Email already registered")

    user = User(
        email=normalize_email(email),
        password_hash=get_password_hash(password),
        username=username,
        full_name=full_name,
        diet_preference=diet_preference,
    )
    db.add(user)
    _commit_user(db, user, "create user")
    logger.info(f"Created user {user.id}")
    return user


def update_profile(
    db: Session,
    user: User,
    username: str | None = None,
    full_name: str | None = None,
    email: str | None = None,
    password: str | None = None,
    diet_preference: str | None = None,
) -> User:
    """Update profile fields that were given."""
    if email is not None:
        existing = get_user_by_email(db, email)
        if existing and existing.id != user.id:
            raise DuplicateError("Email already registered")
        user.email = normalize_email(email)
    if username is not None:
        user.username = username
    if full_name is not None:
        user.full_name = full_name or None
    if password is not None:
        user.password_hash = get_password_hash(password)
    if diet_preference is not None:
        user.diet_preference = diet_preference

    _commit_user(db, user, "update profile")
    return user
