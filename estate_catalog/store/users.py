"""User account management for administrators."""

import logging
from collections import Counter
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable

from estate_catalog.models.activity import ActionResult
from estate_catalog.models.enums import UserRole, UserStatus
from estate_catalog.models.user import User, UserStats, Viewer
from estate_catalog.realtime.activity_log import ActivityLog
from estate_catalog.realtime.notifications import NotificationInbox
from estate_catalog.realtime.publisher import ActivityPublisher
from estate_catalog.repository.base import UserRepository
from estate_catalog.store.base import EntityRegistry

logger = logging.getLogger(__name__)


class UserRegistry(EntityRegistry):
    """Accounts listed and moderated from the admin dashboard.

    Every command is administrator-only. Deleted accounts stay in the
    collection with ``deleted_at`` set but are hidden from lookups.
    """

    kind = "user"

    def __init__(
        self,
        users: Iterable[User] = (),
        repository: UserRepository | None = None,
        activity_log: ActivityLog | None = None,
        publisher: ActivityPublisher | None = None,
        notifications: NotificationInbox | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(users, repository, activity_log, publisher, notifications)
        self._now = clock

    def get(self, user_id: str) -> User | None:
        user = self._items.get(user_id)
        return None if user is None or user.is_deleted else user

    def all(self) -> list[User]:
        return [u for u in self._items.values() if not u.is_deleted]

    def search(
        self,
        query: str = "",
        role: UserRole | str | None = None,
        status: UserStatus | str | None = None,
        created_from: datetime | None = None,
        created_to: datetime | None = None,
    ) -> list[User]:
        """Filter accounts, newest first.

        ``query`` matches name or email, case-insensitively.
        """
        needle = query.strip().lower()
        matches = [
            u
            for u in self.all()
            if (not needle or needle in u.name.lower() or needle in u.email.lower())
            and (role is None or u.role == role)
            and (status is None or u.status == status)
            and (created_from is None or u.created_at >= created_from)
            and (created_to is None or u.created_at <= created_to)
        ]
        return sorted(matches, key=lambda u: u.created_at, reverse=True)

    def stats(self) -> UserStats:
        users = self.all()
        now = self._now()
        return UserStats(
            total_users=len(users),
            active_users=sum(1 for u in users if u.status == UserStatus.ACTIVE),
            suspended_users=sum(1 for u in users if u.status == UserStatus.SUSPENDED),
            new_users_this_month=sum(
                1 for u in users if (u.created_at.year, u.created_at.month) == (now.year, now.month)
            ),
            users_by_role=dict(Counter(u.role.value for u in users)),
        )

    def _apply(
        self,
        user_id: str,
        viewer: Viewer | None,
        action: str,
        message: str,
        reason: str | None = None,
        refuse: Callable[[User, Viewer], str | None] | None = None,
        **changes,
    ) -> ActionResult:
        if viewer is None or not viewer.is_admin:
            return ActionResult.fail("Unauthorized")
        user = self.get(user_id)
        if user is None:
            return ActionResult.fail("User not found")
        refusal = refuse(user, viewer) if refuse is not None else None
        if refusal:
            return ActionResult.fail(refusal)

        updated = replace(user, updated_at=self._now(), **changes)
        failure = self._store(updated)
        if failure is not None:
            return failure

        self._emit(viewer.id, f"user.{action}", "user", user_id, {"email": user.email, "reason": reason})
        logger.info("User %s %s by %s", user_id, action, viewer.id)
        return ActionResult.ok(message, data=updated)

    def suspend(self, user_id: str, viewer: Viewer | None, reason: str) -> ActionResult:
        def refuse(user: User, admin: Viewer) -> str | None:
            if user.id == admin.id:
                return "Administrators cannot suspend themselves"
            if user.status == UserStatus.SUSPENDED:
                return "User is already suspended"
            return None

        return self._apply(
            user_id, viewer, "suspended", "User suspended successfully", reason, refuse,
            status=UserStatus.SUSPENDED, suspended_at=self._now(), suspension_reason=reason,
        )

    def activate(self, user_id: str, viewer: Viewer | None) -> ActionResult:
        return self._apply(
            user_id, viewer, "activated", "User activated successfully", None,
            lambda user, _: "User is already active" if user.status == UserStatus.ACTIVE else None,
            status=UserStatus.ACTIVE, suspended_at=None, suspension_reason=None,
        )

    def delete(self, user_id: str, viewer: Viewer | None, reason: str = "Admin deletion") -> ActionResult:
        """Soft-delete an account."""
        return self._apply(
            user_id, viewer, "deleted", "User deleted successfully", reason,
            lambda user, admin: "Administrators cannot delete themselves" if user.id == admin.id else None,
            deleted_at=self._now(), deletion_reason=reason,
        )
