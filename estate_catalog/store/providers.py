"""Provider registry and approval workflow."""

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable

from estate_catalog.exceptions import InvalidEntityStateError
from estate_catalog.models.activity import ActionResult
from estate_catalog.models.enums import NotificationSeverity, ProviderStatus
from estate_catalog.models.provider import AuditEntry, Provider, ProviderRegistration
from estate_catalog.models.user import Viewer
from estate_catalog.realtime.activity_log import ActivityLog
from estate_catalog.realtime.notifications import NotificationInbox
from estate_catalog.realtime.publisher import ActivityPublisher
from estate_catalog.repository.base import ProviderRepository
from estate_catalog.store.base import EntityRegistry

logger = logging.getLogger(__name__)

# Placeholder for "the transition timestamp" in field changes
_NOW = object()

TRANSITIONS: dict[ProviderStatus, frozenset[ProviderStatus]] = {
    ProviderStatus.PENDING: frozenset({ProviderStatus.APPROVED, ProviderStatus.REJECTED}),
    ProviderStatus.APPROVED: frozenset({ProviderStatus.SUSPENDED}),
    ProviderStatus.SUSPENDED: frozenset({ProviderStatus.APPROVED}),
    ProviderStatus.REJECTED: frozenset(),
}

# Provider-facing notification per admin action
NOTICES: dict[str, tuple[str, NotificationSeverity]] = {
    "approved": ("Your provider account has been approved", NotificationSeverity.SUCCESS),
    "rejected": ("Your provider application was rejected", NotificationSeverity.ERROR),
    "suspended": ("Your provider account has been suspended", NotificationSeverity.WARNING),
    "reinstated": ("Your provider account has been reinstated", NotificationSeverity.SUCCESS),
}


def transition(current: ProviderStatus, target: ProviderStatus) -> ProviderStatus:
    """Validate a provider status change.

    Raises
    ------
    InvalidEntityStateError
        If ``target`` cannot be reached from ``current``.
    """
    if target not in TRANSITIONS.get(current, frozenset()):
        raise InvalidEntityStateError(
            f"Cannot move provider from {current.value} to {target.value}"
        )
    return target


class ProviderRegistry(EntityRegistry):
    """Holds provider accounts in registration order."""

    kind = "provider"

    def __init__(
        self,
        providers: Iterable[Provider] = (),
        repository: ProviderRepository | None = None,
        activity_log: ActivityLog | None = None,
        publisher: ActivityPublisher | None = None,
        notifications: NotificationInbox | None = None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(providers, repository, activity_log, publisher, notifications)
        self._new_id = id_factory or (lambda: str(uuid.uuid4()))
        self._now = clock

    def get(self, provider_id: str) -> Provider | None:
        return self._items.get(provider_id)

    def all(self) -> list[Provider]:
        return list(self._items.values())

    def with_status(self, status: ProviderStatus) -> list[Provider]:
        return [p for p in self._items.values() if p.status == status]

    def pending_providers(self) -> list[Provider]:
        return self.with_status(ProviderStatus.PENDING)

    def approved_providers(self) -> list[Provider]:
        return self.with_status(ProviderStatus.APPROVED)

    def rejected_providers(self) -> list[Provider]:
        return self.with_status(ProviderStatus.REJECTED)

    def suspended_providers(self) -> list[Provider]:
        return self.with_status(ProviderStatus.SUSPENDED)

    def audit_entries(self, provider_id: str) -> tuple[AuditEntry, ...]:
        provider = self._items.get(provider_id)
        return provider.audit_trail if provider is not None else ()

    def register(self, registration: ProviderRegistration) -> ActionResult:
        """Create a pending provider account from the registration form."""
        email = registration.email.strip().lower()
        if not email or not registration.business_name.strip():
            return ActionResult.fail("Email and business name are required")
        business_email = registration.business_email.strip().lower()
        for existing in self._items.values():
            if existing.email.lower() == email or (
                business_email and existing.business_email.lower() == business_email
            ):
                return ActionResult.fail("A provider with this email already exists")

        provider = Provider(
            id=self._new_id(),
            name=registration.name.strip(),
            email=email,
            business_name=registration.business_name.strip(),
            business_email=registration.business_email.strip(),
            phone=registration.phone.strip(),
            city=registration.city.strip(),
            joined_at=self._now().date(),
        )
        failure = self._store(provider)
        if failure is not None:
            return failure
        self._emit(provider.id, "provider.registered", "provider", provider.id)
        logger.info("Provider %s registered (%s)", provider.id, provider.business_name)
        return ActionResult.ok("Registration submitted for review", data=provider)

    def _move(
        self,
        provider_id: str,
        viewer: Viewer | None,
        target: ProviderStatus,
        action: str,
        message: str,
        reason: str | None = None,
        **changes,
    ) -> ActionResult:
        if viewer is None or not viewer.is_admin:
            return ActionResult.fail("Unauthorized")
        provider = self._items.get(provider_id)
        if provider is None:
            return ActionResult.fail("Provider not found")

        try:
            transition(provider.status, target)
        except InvalidEntityStateError as e:
            logger.info("Provider %s: %s refused (%s)", provider_id, action, e)
            return ActionResult.fail(str(e))

        now = self._now()
        entry = AuditEntry(
            actor_id=viewer.id,
            action=action,
            from_status=provider.status,
            to_status=target,
            timestamp=now,
            reason=reason,
        )
        updated = replace(
            provider,
            status=target,
            audit_trail=provider.audit_trail + (entry,),
            **{key: (now if value is _NOW else value) for key, value in changes.items()},
        )
        failure = self._store(updated)
        if failure is not None:
            return failure

        self._emit(
            viewer.id, f"provider.{action}", "provider", provider_id,
            {"from": provider.status.value, "to": target.value, "reason": reason},
        )
        title, severity = NOTICES[action]
        self._notify(
            provider_id, f"provider.{action}", title, reason or message, severity,
            "provider", provider_id,
        )
        logger.info(
            "Provider %s: %s -> %s", provider_id, provider.status.value, target.value,
            extra={"provider_id": provider_id, "viewer_id": viewer.id, "action_type": f"provider.{action}"},
        )
        return ActionResult.ok(message, data=updated)

    def approve(self, provider_id: str, viewer: Viewer | None) -> ActionResult:
        return self._move(
            provider_id, viewer, ProviderStatus.APPROVED, "approved", "Provider approved",
            approved_at=_NOW, approved_by=viewer.id if viewer else None, is_verified=True,
        )

    def reject(self, provider_id: str, viewer: Viewer | None, reason: str | None = None) -> ActionResult:
        return self._move(
            provider_id, viewer, ProviderStatus.REJECTED, "rejected", "Provider rejected", reason,
            rejected_at=_NOW, rejected_by=viewer.id if viewer else None, rejection_reason=reason,
        )

    def suspend(self, provider_id: str, viewer: Viewer | None, reason: str | None = None) -> ActionResult:
        return self._move(
            provider_id, viewer, ProviderStatus.SUSPENDED, "suspended", "Provider suspended", reason,
            suspended_at=_NOW, suspension_reason=reason,
        )

    def reinstate(self, provider_id: str, viewer: Viewer | None) -> ActionResult:
        return self._move(
            provider_id, viewer, ProviderStatus.APPROVED, "reinstated", "Provider reinstated",
            suspended_at=None, suspension_reason=None,
        )
