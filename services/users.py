"""User registration, login checks and the bootstrap admin."""

import logging
import uuid
from typing import Optional

from auth import hash_password, verify_password
from database import DocumentStore
from errors import Conflict, Forbidden, ValidationError

logger = logging.getLogger(__name__)

ROLES = ("admin", "mechanic", "customer")
REGISTRABLE_ROLES = ("mechanic", "customer")


def find_user(document: dict, user_id: str) -> Optional[dict]:
    return next((u for u in document["users"] if u.get("id") == user_id), None)


def find_user_by_username(document: dict, username: str) -> Optional[dict]:
    return next((u for u in document["users"] if u.get("username") == username), None)


def public_user(user: dict) -> dict:
    """User fields that are safe to return to a client."""
    return {
        "id": user["id"],
        "username": user["username"],
        "role": user["role"],
        "fullName": user.get("fullName"),
    }


class UserService:
    def __init__(self, store: DocumentStore):
        self.store = store

    def get_user(self, user_id: str) -> Optional[dict]:
        return find_user(self.store.load(), user_id)

    def register_user(self, username, password, full_name, mobile, role) -> str:
        """Create a mechanic or customer account and return its id."""
        if not all([username, password, full_name, mobile, role]):
            raise ValidationError("Missing required fields.")
        if role == "admin":
            raise Forbidden("Cannot register new admins.")
        if role not in REGISTRABLE_ROLES:
            raise ValidationError("Role must be 'mechanic' or 'customer'.", {"role": role})

        with self.store.transaction() as document:
            if find_user_by_username(document, username):
                raise Conflict("Username already exists.", {"username": username})
            user = {
                "id": str(uuid.uuid4()),
                "username": username,
                "password": hash_password(password),
                "fullName": full_name,
                "mobile": mobile,
                "role": role,
            }
            document["users"].append(user)

        logger.info("Registered %s %s (%s)", role, username, user["id"])
        return user["id"]

    def authenticate(self, username: str, password: str) -> Optional[dict]:
        user = find_user_by_username(self.store.load(), username)
        if not user or not verify_password(password, user.get("password", "")):
            logger.warning("Failed login for %s", username)
            return None
        return user

    def ensure_admin(self, username: str, password: str, full_name: str) -> Optional[str]:
        """Create the first admin account if the document has none."""
        with self.store.transaction() as document:
            if any(u.get("role") == "admin" for u in document["users"]):
                return None
            if find_user_by_username(document, username):
                raise Conflict("Username already exists.", {"username": username})
            user = {
                "id": str(uuid.uuid4()),
                "username": username,
                "password": hash_password(password),
                "fullName": full_name,
                "mobile": "",
                "role": "admin",
            }
            document["users"].append(user)

        logger.info("Created initial admin %s", username)
        return user["id"]
