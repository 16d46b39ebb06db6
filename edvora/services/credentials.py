"""Credential Store: user records with hashed passwords."""

import logging
from urllib.parse import quote

from edvora.auth import passwords
from edvora.core import config
from edvora.core.errors import DuplicateField, InvalidCredential, NotFound
from edvora.storage.base import UserRepository

logger = logging.getLogger(__name__)

ROLES = ("student", "admin", "employer")
PRIVATE_USER_FIELDS = {"password", "password_hash"}


def public_user(record: dict) -> dict:
    return {key: value for key, value in record.items() if key not in PRIVATE_USER_FIELDS}


def default_avatar(name: str) -> str:
    return f"https://ui-avatars.com/api/?name={quote(name)}&background=667eea&color=fff"


class CredentialStore:

    def __init__(self, users: UserRepository):
        self.users = users

    def create(self, candidate: dict) -> dict:
        """Store a new user, hashing ``candidate['password']``.

        Raises ``DuplicateField`` naming the first of username, email and
        studentId that is already registered.
        """
        field = self.users.find_conflict(candidate)
        if field:
            raise DuplicateField(field)

        record = {key: value for key, value in candidate.items() if key != "password"}
        record["password_hash"] = passwords.hash_password(candidate["password"])
        record.setdefault("role", "student")
        record["department"] = record.get("department") or config.DEFAULT_DEPARTMENT
        record["avatar"] = record.get("avatar") or default_avatar(record["name"])
        return public_user(self.users.add(record))

    def verify(self, identifier: str, password: str) -> dict:
        user = self.users.find_by_identifier(identifier)
        if user is None and "@" in identifier and identifier != identifier.lower():
            # Emails are stored lower-cased.
            user = self.users.find_by_identifier(identifier.lower())
        if user is None:
            passwords.dummy_verify()
            raise NotFound("User not found")
        if not passwords.verify_password(password, user["password_hash"]):
            raise InvalidCredential()
        return public_user(user)

    def find_by_id(self, user_id: str) -> dict:
        user = self.users.get(user_id)
        if user is None:
            raise NotFound("User not found")
        return public_user(user)

    def update(self, user_id: str, fields: dict) -> dict:
        """Apply a partial profile update.

        The password is re-hashed only when ``fields`` carries a new one.
        """
        if self.users.get(user_id) is None:
            raise NotFound("User not found")

        field = self.users.find_conflict(fields, exclude_id=user_id)
        if field:
            raise DuplicateField(field)

        changes = {key: value for key, value in fields.items() if key != "password"}
        if fields.get("password"):
            changes["password_hash"] = passwords.hash_password(fields["password"])
            logger.info("Password changed for user %s", user_id)

        user = self.users.update(user_id, changes)
        if user is None:
            raise NotFound("User not found")
        return public_user(user)
