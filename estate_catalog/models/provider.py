"""Provider (listing agency) models."""

from dataclasses import dataclass, field
from datetime import date, datetime

from estate_catalog.models.enums import ProviderStatus, SubscriptionPlan


@dataclass(frozen=True)
class AuditEntry:
    """One admin action applied to a provider."""

    actor_id: str
    action: str
    from_status: ProviderStatus
    to_status: ProviderStatus
    timestamp: datetime
    reason: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "from_status", ProviderStatus(self.from_status))
        object.__setattr__(self, "to_status", ProviderStatus(self.to_status))


@dataclass(frozen=True)
class ProviderRegistration:
    """Self-service registration form."""

    name: str
    email: str
    phone: str
    business_name: str
    business_email: str
    business_phone: str
    city: str


@dataclass(frozen=True)
class Provider:
    """Listing agency account, approved or rejected by an administrator."""

    id: str
    name: str
    email: str
    business_name: str
    business_email: str = ""
    phone: str = ""
    city: str = ""
    status: ProviderStatus = ProviderStatus.PENDING
    subscription_plan: SubscriptionPlan = SubscriptionPlan.BASIC
    is_verified: bool = False
    joined_at: date = field(default_factory=date.today)
    approved_at: datetime | None = None
    approved_by: str | None = None
    rejected_at: datetime | None = None
    rejected_by: str | None = None
    rejection_reason: str | None = None
    suspended_at: datetime | None = None
    suspension_reason: str | None = None
    audit_trail: tuple[AuditEntry, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", ProviderStatus(self.status))
        object.__setattr__(self, "subscription_plan", SubscriptionPlan(self.subscription_plan))
        object.__setattr__(self, "audit_trail", tuple(self.audit_trail))

    @property
    def is_approved(self) -> bool:
        return self.status == ProviderStatus.APPROVED
