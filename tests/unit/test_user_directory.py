"""Unit tests for the MongoDB user directory.

The motor collection is replaced by mocks; no database is needed.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from admin_notifications.core.exceptions import DirectoryLookupError
from admin_notifications.directory import UserDirectory
from admin_notifications.directory.users import CANDIDATE_QUERY


def _collection(documents=None, error=None) -> MagicMock:
    cursor = MagicMock()
    if error is not None:
        cursor.to_list = AsyncMock(side_effect=error)
    else:
        cursor.to_list = AsyncMock(return_value=documents or [])

    collection = MagicMock()
    collection.find.return_value = cursor
    collection.database.command = AsyncMock(return_value={"ok": 1.0})
    return collection


class TestFindNotificationCandidates:
    @pytest.mark.asyncio
    async def test_queries_active_admins_and_moderators(self, settings):
        collection = _collection()
        directory = UserDirectory(settings, collection=collection)

        await directory.find_notification_candidates()

        query = collection.find.call_args.args[0]
        assert query == {"isActive": True, "role": {"$in": ["admin", "moderator"]}}
        assert query == CANDIDATE_QUERY

    @pytest.mark.asyncio
    async def test_returns_users_in_directory_order(self, settings):
        collection = _collection([
            {"_id": 1, "email": "b@x.com", "isActive": True, "role": "admin"},
            {"_id": 2, "email": "a@x.com", "isActive": True, "role": "moderator",
             "preferences": {"notifications": {"email": False}}},
        ])
        directory = UserDirectory(settings, collection=collection)

        users = await directory.find_notification_candidates()

        assert [u.email for u in users] == ["b@x.com", "a@x.com"]
        assert users[1].email_notifications_enabled is False

    @pytest.mark.asyncio
    async def test_skips_malformed_documents(self, settings, caplog):
        collection = _collection([
            {"_id": 1, "email": "a@x.com", "isActive": True, "role": "superuser"},
            {"_id": 2, "email": "b@x.com", "isActive": True, "role": "admin"},
        ])
        directory = UserDirectory(settings, collection=collection)

        users = await directory.find_notification_candidates()

        assert [u.email for u in users] == ["b@x.com"]
        assert "Skipping malformed user document 1" in caplog.text

    @pytest.mark.asyncio
    async def test_driver_error_raises_lookup_error(self, settings):
        collection = _collection(error=ServerSelectionTimeoutError("no servers"))
        directory = UserDirectory(settings, collection=collection)

        with pytest.raises(DirectoryLookupError):
            await directory.find_notification_candidates()


class TestClientLifecycle:
    def test_client_created_lazily(self, settings):
        with patch("admin_notifications.directory.users.AsyncIOMotorClient") as mock_client:
            directory = UserDirectory(settings)
            mock_client.assert_not_called()

            _ = directory.collection

            mock_client.assert_called_once_with(settings.MONGODB_URI)

    def test_close_releases_client(self, settings):
        with patch("admin_notifications.directory.users.AsyncIOMotorClient") as mock_client:
            directory = UserDirectory(settings)
            _ = directory.collection

            directory.close()

            mock_client.return_value.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_ping(self, settings):
        collection = _collection()
        directory = UserDirectory(settings, collection=collection)

        assert await directory.ping() is True
        collection.database.command.assert_awaited_once_with("ping")

    @pytest.mark.asyncio
    async def test_ping_failure(self, settings):
        collection = _collection()
        collection.database.command = AsyncMock(
            side_effect=ServerSelectionTimeoutError("no servers")
        )
        directory = UserDirectory(settings, collection=collection)

        assert await directory.ping() is False
