"""
Digital Life Lessons API — User Service
=========================================

What:  User listing, premium/role status lookup and first-sign-in creation.
Who:   Called by routes/users.py.

Users are keyed by email. This service never updates or deletes a user;
premium upgrades and role changes happen outside this API.
"""

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from lifelessons.database import USERS
from lifelessons.exceptions import DatabaseError
from lifelessons.models.documents import insert_result, new_user_document, to_public

logger = logging.getLogger(__name__)

USER_EXISTS = "User already exists"


class UserService:

    async def list_users(
        self, db: AsyncIOMotorDatabase, email: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """All users, or only those whose email matches exactly."""
        query = {"email": email} if email else {}
        try:
            users = await db[USERS].find(query).to_list(length=None)
        except Exception as e:
            logger.error("Database error listing users: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch users")
        return [to_public(u) for u in users]

    async def get_user_status(self, db: AsyncIOMotorDatabase, email: str) -> Dict[str, Any]:
        """
        Premium flag and role for a user.

        Unknown users, and users missing either field, get the defaults
        (isPremium=False, role="user") rather than a 404.
        """
        try:
            user = await db[USERS].find_one({"email": email})
        except Exception as e:
            logger.error("Database error fetching status for %s: %s", email, str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch user status")
        user = user or {}
        return {
            "isPremium": bool(user.get("isPremium") or False),
            "role": user.get("role") or "user",
        }

    async def create_user(self, db: AsyncIOMotorDatabase, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a user unless the email is already registered.

        Returns:
            The insert result, or {"message": "User already exists"} (HTTP 200).
        """
        email = fields["email"]
        try:
            if await db[USERS].find_one({"email": email}):
                return {"message": USER_EXISTS}
            try:
                result = await db[USERS].insert_one(new_user_document(fields))
            except DuplicateKeyError:
                # Lost the race against a concurrent sign-in with the same email
                logger.info("Concurrent user creation for %s", email)
                return {"message": USER_EXISTS}
        except Exception as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to create user")

        logger.info("User created: %s", email)
        return insert_result(result)


user_service = UserService()
