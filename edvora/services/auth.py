"""Auth Gateway: registration, login and profile operations."""

import logging

from edvora.auth import jwt_handler
from edvora.core import config
from edvora.core.errors import InvalidCredential, NotFound, ValidationError
from edvora.services.credentials import CredentialStore

logger = logging.getLogger(__name__)

REGISTER_FIELDS = ("username", "email", "password", "name")
PROFILE_FIELDS = ("username", "email", "student_id", "name", "department", "bio", "phone", "avatar", "password")


def _clean(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _normalize(fields: dict) -> dict:
    normalized = {key: _clean(value) for key, value in fields.items()}
    if normalized.get("email"):
        normalized["email"] = normalized["email"].lower()
    return normalized


def _check_password(password: str) -> None:
    if len(password) < config.MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {config.MIN_PASSWORD_LENGTH} characters")


def token_claims(user: dict) -> dict:
    return {
        "userId": user["id"],
        "username": user["username"],
        "email": user["email"],
        "role": user["role"],
    }


class AuthGateway:

    def __init__(self, credentials: CredentialStore):
        self.credentials = credentials

    def register(self, data: dict) -> dict:
        # Passwords are never trimmed.
        password = data.get("password")
        candidate = _normalize({key: value for key, value in data.items() if key != "password"})
        if not password or not all(candidate.get(field) for field in REGISTER_FIELDS if field != "password"):
            raise ValidationError("Username, email, password, and name are required")
        _check_password(password)

        user = self.credentials.create({
            "username": candidate["username"],
            "email": candidate["email"],
            "password": password,
            "name": candidate["name"],
            "student_id": candidate.get("student_id"),
            "department": candidate.get("department"),
        })
        logger.info("Registered user %s", user["username"])
        return {"token": jwt_handler.issue_token(token_claims(user)), "user": user}

    def login(self, identifier: str | None, password: str | None) -> dict:
        identifier = _clean(identifier)
        if not identifier or not password:
            raise ValidationError("Email/Username and password are required")

        try:
            user = self.credentials.verify(identifier, password)
        except NotFound:
            logger.info("Login failed for %s: user not found", identifier)
            raise InvalidCredential() from None
        except InvalidCredential:
            logger.info("Login failed for %s: password mismatch", identifier)
            raise InvalidCredential() from None

        logger.info("Login succeeded for %s", user["username"])
        return {"token": jwt_handler.issue_token(token_claims(user)), "user": user}

    def profile(self, user_id: str) -> dict:
        return self.credentials.find_by_id(user_id)

    def update_profile(self, user_id: str, data: dict) -> dict:
        fields = {key: value for key, value in data.items() if key in PROFILE_FIELDS}
        password = fields.pop("password", None)
        fields = _normalize(fields)
        for required in ("username", "email", "name"):
            if required in data and not fields.get(required):
                raise ValidationError(f"{required} cannot be empty")
        if password is not None:
            _check_password(password)
            fields["password"] = password
        return self.credentials.update(user_id, fields)
