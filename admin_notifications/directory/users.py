"""Admin user directory backed by MongoDB.

Read-only access to the back-office users collection, used to find the
administrators who may receive notification email.

Features:
- Async queries through motor
- Lazy client creation (no network I/O until first query)
- Malformed user documents skipped with a warning
"""

from __future__ import annotations

from typing import Any, Protocol

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from admin_notifications.config import NotificationSettings
from admin_notifications.core.exceptions import DirectoryLookupError
from admin_notifications.core.logger import get_logger
from admin_notifications.models.user import NOTIFIABLE_ROLES, AdminUser

logger = get_logger(__name__)

CANDIDATE_QUERY: dict[str, Any] = {
    "isActive": True,
    "role": {"$in": list(NOTIFIABLE_ROLES)},
}
CANDIDATE_PROJECTION = {"email": 1, "isActive": 1, "role": 1, "preferences": 1}


class AdminDirectory(Protocol):
    """Anything the dispatcher can ask for notification candidates."""

    async def find_notification_candidates(self) -> list[AdminUser]:
        ...


class UserDirectory:
    """MongoDB user directory.

    Attributes:
        settings: Service settings holding the MongoDB connection details.
    """

    def __init__(
        self,
        settings: NotificationSettings | None = None,
        collection: AsyncIOMotorCollection | None = None,
    ) -> None:
        """Initialize the directory.

        Args:
            settings: Service settings (loaded from the environment if None).
            collection: Pre-built users collection; skips client creation.
        """
        self.settings = settings or NotificationSettings()
        self._client: AsyncIOMotorClient | None = None
        self._collection = collection

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """Users collection, creating the client on first use."""
        if self._collection is None:
            logger.debug(
                f"Connecting to MongoDB database '{self.settings.MONGODB_DATABASE}'"
            )
            self._client = AsyncIOMotorClient(self.settings.MONGODB_URI)
            database = self._client[self.settings.MONGODB_DATABASE]
            self._collection = database[self.settings.USERS_COLLECTION]
        return self._collection

    async def find_notification_candidates(self) -> list[AdminUser]:
        """Fetch active admins and moderators in directory order.

        Returns:
            Parsed users; documents that fail validation are skipped.

        Raises:
            DirectoryLookupError: If the database query fails.
        """
        try:
            cursor = self.collection.find(CANDIDATE_QUERY, CANDIDATE_PROJECTION)
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to query admin users: {e}")
            raise DirectoryLookupError(f"Failed to query admin users: {e}") from e

        users: list[AdminUser] = []
        for document in documents:
            try:
                users.append(AdminUser.model_validate(document))
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed user document {document.get('_id')}: "
                    f"{e.error_count()} validation error(s)"
                )

        logger.debug(f"Directory returned {len(users)} admin/moderator user(s)")
        return users

    async def ping(self) -> bool:
        """Check that the database answers.

        Returns:
            True if the server responded to ping, False otherwise.
        """
        try:
            await self.collection.database.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB ping failed: {e}")
            return False

    def close(self) -> None:
        """Close the MongoDB client if this directory created one."""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._collection = None
            logger.debug("MongoDB client closed")
