"""Services for Identity app."""
import logging

from django.db import IntegrityError, transaction

from .dtos import UserDTO
from .models import User
from .security import hash_password, verify_password

logger = logging.getLogger(__name__)


class EmailAlreadyExists(Exception):
    pass


class UnknownEmail(Exception):
    pass


class IncorrectPassword(Exception):
    pass


def register_user(email: str, password: str) -> UserDTO:
    """
    Store a new user with a bcrypt-hashed password.

    Raises EmailAlreadyExists when the email is taken (exact match).
    """
    if User.objects.filter(email=email).exists():
        raise EmailAlreadyExists(email)

    try:
        with transaction.atomic():
            user = User.objects.create(email=email, password=hash_password(password))
    except IntegrityError:
        # Lost a race with a concurrent registration
        raise EmailAlreadyExists(email)
    logger.info(f"Registered user {user.id}")
    return UserDTO(id=user.id, email=user.email)


def authenticate_user(email: str, password: str) -> UserDTO:
    """
    Check credentials.

    Raises UnknownEmail or IncorrectPassword; returns the user otherwise.
    """
    user = User.objects.filter(email=email).first()
    if user is None:
        logger.warning("Login attempt for unknown email")
        raise UnknownEmail(email)

    if not verify_password(password, user.password):
        logger.warning(f"Wrong password for user {user.id}")
        raise IncorrectPassword(email)

    logger.info(f"User {user.id} logged in")
    return UserDTO(id=user.id, email=user.email)
