"""Property catalog store.

The store owns an immutable snapshot (a tuple of ``Property`` values) and
exposes commands that build the next snapshot, persist it through the
injected repository and only then swap it in. A failed save leaves the
previous snapshot in place. There is no version check between sessions:
the last save wins.
"""

import logging
import uuid
from collections import Counter
from dataclasses import fields, replace
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable, Sequence

from estate_catalog.exceptions import RepositoryError, ValidationError
from estate_catalog.models.activity import ActionResult
from estate_catalog.models.enums import NotificationSeverity, PropertyCategory, PropertyStatus
from estate_catalog.models.filters import FilterSpec
from estate_catalog.models.property import Property
from estate_catalog.models.submission import PropertySubmission, PropertyUpdate
from estate_catalog.models.user import Viewer
from estate_catalog.realtime.activity_log import ActivityLog
from estate_catalog.realtime.notifications import NotificationInbox
from estate_catalog.realtime.publisher import ActivityPublisher
from estate_catalog.repository.base import PropertyRepository
from estate_catalog.search.engine import is_visible, search
from estate_catalog.search.features import FEATURE_TAGS, count_feature_tags, filter_by_features
from estate_catalog.store.base import GENERIC_FAILURE, ActivityEmitter

logger = logging.getLogger(__name__)

# Statuses a listing owner may set without an administrator
OWNER_STATUSES = frozenset(
    {PropertyStatus.DRAFT, PropertyStatus.PENDING, PropertyStatus.SOLD, PropertyStatus.RENTED}
)


def validate_submission(submission: PropertySubmission) -> None:
    """Check a listing form before it reaches the repository.

    Raises
    ------
    ValidationError
        With a user-facing message naming the first problem found.
    """
    if not submission.title or not submission.title.strip():
        raise ValidationError("Title is required")
    if not submission.description or not submission.description.strip():
        raise ValidationError("Description is required")
    if not submission.location.address or not submission.location.address.strip():
        raise ValidationError("Address is required")
    if not submission.location.city or not submission.location.city.strip():
        raise ValidationError("City is required")
    try:
        price = Decimal(str(submission.price)) if submission.price is not None else None
        positive = price is not None and price.is_finite() and price > 0
    except ArithmeticError:
        positive = False
    if not positive:
        raise ValidationError("Price must be greater than zero")
    if submission.area is None or submission.area < 0:
        raise ValidationError("Area must not be negative")


class CatalogStore(ActivityEmitter):
    """In-memory catalog backed by a pluggable repository."""

    def __init__(
        self,
        repository: PropertyRepository,
        activity_log: ActivityLog | None = None,
        publisher: ActivityPublisher | None = None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] = datetime.now,
        notifications: NotificationInbox | None = None,
    ) -> None:
        super().__init__(activity_log, publisher, notifications)
        self.repository = repository
        self._records: tuple[Property, ...] = ()
        self._new_id = id_factory or (lambda: str(uuid.uuid4()))
        self._now = clock

    @property
    def records(self) -> tuple[Property, ...]:
        """Current snapshot, every status included."""
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    # Loading
    def refresh(self) -> ActionResult:
        """Reload the snapshot from the repository."""
        try:
            loaded = tuple(self.repository.load())
        except RepositoryError as e:
            logger.exception("Error loading properties")
            return ActionResult.fail(GENERIC_FAILURE, error=str(e))

        self._records = loaded
        summary = self.status_summary()
        logger.info("Loaded %d properties", len(loaded))
        logger.debug("Properties by status: %s", summary["status"])
        logger.debug("Properties by category: %s", summary["category"])
        logger.debug("Properties by type: %s", summary["type"])
        return ActionResult.ok(f"Loaded {len(loaded)} properties", data=len(loaded))

    def _commit(
        self,
        records: Iterable[Property],
        viewer: Viewer | None,
        action_type: str,
        target: Property,
        message: str,
        details: dict | None = None,
    ) -> ActionResult:
        """Persist the next snapshot, then swap it in and report activity."""
        records = tuple(records)
        actor_id = viewer.id if viewer is not None else "anonymous"
        context = {"property_id": target.id, "viewer_id": actor_id, "action_type": action_type}
        try:
            self.repository.save(records)
        except RepositoryError as e:
            logger.exception("Error applying %s to %s", action_type, target.id, extra=context)
            return ActionResult.fail(GENERIC_FAILURE, error=str(e))

        self._records = records
        logger.info("%s: %s", action_type, target.id, extra=context)
        self._emit(actor_id, action_type, "property", target.id, details)
        return ActionResult.ok(message, data=target)

    def _replace(self, updated: Property) -> list[Property]:
        return [updated if r.id == updated.id else r for r in self._records]

    # Commands
    def add_property(self, submission: PropertySubmission, viewer: Viewer | None) -> ActionResult:
        """Create a listing.

        Administrators publish immediately; providers' listings wait in
        ``pending`` for approval.
        """
        if viewer is None:
            return ActionResult.fail("Not authenticated")
        if not (viewer.is_admin or viewer.is_provider):
            return ActionResult.fail("Unauthorized")

        try:
            validate_submission(submission)
        except ValidationError as e:
            return ActionResult.fail(str(e))

        now = self._now()
        status = PropertyStatus.PUBLISHED if viewer.is_admin else PropertyStatus.PENDING
        try:
            prop = Property(
                id=self._new_id(),
                title=submission.title.strip(),
                description=submission.description.strip(),
                type=submission.type,
                category=submission.category,
                price=Decimal(str(submission.price)),
                currency=submission.currency,
                location=submission.location,
                features=submission.to_features(),
                images=submission.images,
                status=status,
                provider_id=None if viewer.is_admin else viewer.id,
                created_at=now,
                updated_at=now,
                published_at=now if status == PropertyStatus.PUBLISHED else None,
            )
        except (ValidationError, ValueError) as e:
            return ActionResult.fail(str(e))

        message = "Property published" if viewer.is_admin else "Property submitted for review"
        return self._commit(
            self._records + (prop,), viewer, "property.created", prop, message,
            {"status": status.value},
        )

    def update_property(
        self, property_id: str, update: PropertyUpdate, viewer: Viewer | None
    ) -> ActionResult:
        """Apply a partial edit. Owners and administrators only."""
        if viewer is None:
            return ActionResult.fail("Not authenticated")

        current = self.get_property(property_id)
        if current is None:
            return ActionResult.fail("Property not found")
        if not viewer.is_admin and current.provider_id != viewer.id:
            return ActionResult.fail("Not authorized to update this property")

        changes = {
            f.name: getattr(update, f.name)
            for f in fields(update)
            if getattr(update, f.name) is not None
        }
        now = self._now()

        status = changes.get("status")
        if status is not None:
            try:
                status = PropertyStatus(status)
            except ValueError:
                return ActionResult.fail(f"Unknown status {status!r}")
            if not viewer.is_admin and status not in OWNER_STATUSES:
                return ActionResult.fail("Unauthorized")
            changes["status"] = status
            changes["published_at"] = now if status == PropertyStatus.PUBLISHED else None

        if "price" in changes:
            try:
                changes["price"] = Decimal(str(changes["price"]))
                positive = changes["price"].is_finite() and changes["price"] > 0
            except ArithmeticError:
                positive = False
            if not positive:
                return ActionResult.fail("Price must be greater than zero")

        changes["updated_at"] = now
        try:
            updated = replace(current, **changes)
        except (ValidationError, ValueError) as e:
            return ActionResult.fail(str(e))

        return self._commit(
            self._replace(updated), viewer, "property.updated", updated, "Property updated",
            {"fields": sorted(k for k in changes if k != "updated_at")},
        )

    def approve_property(self, property_id: str, viewer: Viewer | None) -> ActionResult:
        """Publish a listing. Administrators only."""
        if viewer is None or not viewer.is_admin:
            return ActionResult.fail("Unauthorized")
        current = self.get_property(property_id)
        if current is None:
            return ActionResult.fail("Property not found")

        now = self._now()
        updated = replace(
            current,
            status=PropertyStatus.PUBLISHED,
            published_at=now,
            updated_at=now,
            rejection_reason=None,
            rejected_at=None,
            rejected_by=None,
        )
        result = self._commit(
            self._replace(updated), viewer, "property.approved", updated, "Property approved and published"
        )
        if result:
            self._notify(
                updated.provider_id, "property.approved", "Property approved",
                f"\"{updated.title}\" is now published", NotificationSeverity.SUCCESS,
                "property", updated.id,
            )
        return result

    def reject_property(
        self, property_id: str, viewer: Viewer | None, reason: str | None = None
    ) -> ActionResult:
        """Reject a listing with an optional reason. Administrators only."""
        if viewer is None or not viewer.is_admin:
            return ActionResult.fail("Unauthorized")
        current = self.get_property(property_id)
        if current is None:
            return ActionResult.fail("Property not found")

        now = self._now()
        updated = replace(
            current,
            status=PropertyStatus.REJECTED,
            published_at=None,
            updated_at=now,
            rejection_reason=reason,
            rejected_at=now,
            rejected_by=viewer.id,
        )
        result = self._commit(
            self._replace(updated), viewer, "property.rejected", updated, "Property rejected",
            {"reason": reason} if reason else None,
        )
        if result:
            self._notify(
                updated.provider_id, "property.rejected", "Property rejected",
                reason or f"\"{updated.title}\" was not approved", NotificationSeverity.ERROR,
                "property", updated.id,
            )
        return result

    def delete_property(self, property_id: str, viewer: Viewer | None) -> ActionResult:
        """Remove a listing. Owners and administrators only."""
        if viewer is None:
            return ActionResult.fail("Not authenticated")
        current = self.get_property(property_id)
        if current is None:
            return ActionResult.fail("Property not found")
        if not viewer.is_admin and current.provider_id != viewer.id:
            return ActionResult.fail("Not authorized to delete this property")

        remaining = [r for r in self._records if r.id != property_id]
        return self._commit(remaining, viewer, "property.deleted", current, "Property deleted")

    def _increment(self, property_id: str, counter: str) -> ActionResult:
        current = self.get_property(property_id)
        if current is None:
            return ActionResult.fail("Property not found")
        updated = replace(current, **{counter: getattr(current, counter) + 1})
        records = tuple(self._replace(updated))
        try:
            self.repository.save(records)
        except RepositoryError as e:
            logger.error("Error recording %s for %s: %s", counter, property_id, e)
            return ActionResult.fail(GENERIC_FAILURE, error=str(e))
        self._records = records
        return ActionResult.ok(f"{counter} recorded", data=updated)

    def record_view(self, property_id: str) -> ActionResult:
        return self._increment(property_id, "views")

    def record_inquiry(self, property_id: str) -> ActionResult:
        return self._increment(property_id, "inquiries")

    # Queries
    def get_property(self, property_id: str) -> Property | None:
        for record in self._records:
            if record.id == property_id:
                return record
        return None

    def search(self, spec: FilterSpec | None = None, viewer: Viewer | None = None) -> list[Property]:
        return search(self._records, spec, viewer)

    def feature_counts(
        self,
        category: PropertyCategory | str | None = None,
        provider_id: str | None = None,
        tags: Sequence[str] = FEATURE_TAGS,
    ) -> dict[str, int]:
        return count_feature_tags(self._records, tags, category=category, provider_id=provider_id)

    def browse_features(
        self, tags: Sequence[str], category: PropertyCategory | str | None = None
    ) -> list[Property]:
        return filter_by_features(self._records, tags, category=category)

    def cities(self, category: PropertyCategory | str | None = None, viewer: Viewer | None = None) -> list[str]:
        """Sorted distinct cities of visible listings (filter dropdown values)."""
        return sorted(
            {
                r.location.city
                for r in self._records
                if is_visible(r, viewer) and (category is None or r.category == category)
            }
        )

    def _with_status(self, status: PropertyStatus) -> list[Property]:
        return [r for r in self._records if r.status == status]

    def pending_properties(self) -> list[Property]:
        return self._with_status(PropertyStatus.PENDING)

    def rejected_properties(self) -> list[Property]:
        return self._with_status(PropertyStatus.REJECTED)

    def provider_properties(self, provider_id: str) -> list[Property]:
        """Every listing owned by a provider, whatever its status."""
        return [r for r in self._records if r.provider_id == provider_id]

    def status_summary(self) -> dict[str, dict[str, int]]:
        """Counts by status, category and type."""
        return {
            "status": dict(Counter(r.status.value for r in self._records)),
            "category": dict(Counter(r.category.value for r in self._records)),
            "type": dict(Counter(r.type.value for r in self._records)),
        }
