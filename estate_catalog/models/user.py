"""Session identity and user accounts."""

from dataclasses import dataclass, field
from datetime import datetime

from estate_catalog.models.enums import UserRole, UserStatus


@dataclass(frozen=True)
class Viewer:
    """Authenticated caller: who is acting and with which role."""

    id: str
    role: UserRole = UserRole.USER
    name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_provider(self) -> bool:
        return self.role == UserRole.PROVIDER


@dataclass(frozen=True)
class User:
    """Account profile managed from the admin dashboard.

    Deletion is soft: ``deleted_at`` is set and the account drops out of
    listings and searches.
    """

    id: str
    email: str
    name: str
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.ACTIVE
    phone: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime | None = None
    suspended_at: datetime | None = None
    suspension_reason: str | None = None
    deleted_at: datetime | None = None
    deletion_reason: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "role", UserRole(self.role))
        object.__setattr__(self, "status", UserStatus(self.status))

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def as_viewer(self) -> Viewer:
        return Viewer(id=self.id, role=self.role, name=self.name)


@dataclass(frozen=True)
class UserStats:
    """Account counts shown on the user management page."""

    total_users: int = 0
    active_users: int = 0
    suspended_users: int = 0
    new_users_this_month: int = 0
    users_by_role: dict[str, int] = field(default_factory=dict)
