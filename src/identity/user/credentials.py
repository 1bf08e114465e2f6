"""Password hashing and bearer credentials.

Passwords are hashed with bcrypt. Credentials are HS256 JWTs whose subject is
the user id; verification re-reads the user so that deleted or deactivated
accounts lose access immediately. Callers must have the identity domain
context active.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt
import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from identity.user.queries import find_by_email
from identity.user.user import Role, User
from shared.errors import Unauthorized, ValidationFailure
from shared.settings import Settings, get_settings

logger = structlog.get_logger(__name__)

# bcrypt refuses anything longer, counted in encoded bytes
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of a request."""

    user_id: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def password_fits(password: str) -> bool:
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def hash_password(password: str, settings: Settings | None = None) -> str:
    if not password_fits(password):
        raise ValidationFailure(
            "Password is too long",
            {"password": [f"Must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded"]},
        )
    rounds = (settings or get_settings()).bcrypt_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password_fits(password):
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def issue_credential(user: User, settings: Settings | None = None) -> str:
    settings = settings or get_settings()
    now = datetime.now(UTC)
    claims = {
        "sub": str(user.id),
        "email": user.email.address,
        "role": user.role,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expires_minutes),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_credential(token: str, settings: Settings | None = None) -> Principal:
    """Resolve a bearer token to the caller, or raise ``Unauthorized``."""
    settings = settings or get_settings()
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Not authorized, token expired") from None
    except jwt.PyJWTError:
        raise Unauthorized("Not authorized, token failed") from None

    try:
        user = current_domain.repository_for(User).get(claims["sub"])
    except (ObjectNotFoundError, KeyError):
        raise Unauthorized("User not found") from None

    if not user.is_active:
        raise Unauthorized("Account is disabled")

    return Principal(user_id=str(user.id), email=user.email.address, role=user.role)


def authenticate(email: str, password: str) -> User:
    """Check an email/password pair and stamp the login time."""
    user = find_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("login_failed", email=email.strip().lower())
        raise Unauthorized("Invalid email or password")
    if not user.is_active:
        raise Unauthorized("Account is disabled")

    user.record_login()
    current_domain.repository_for(User).add(user)
    logger.info("login_succeeded", user_id=str(user.id))
    return user
