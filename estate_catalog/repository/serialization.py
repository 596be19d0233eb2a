"""Shared serialization utilities for repositories."""

from dataclasses import fields
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from estate_catalog.exceptions import RepositoryError, ValidationError
from estate_catalog.models.activity import ActivityItem
from estate_catalog.models.base import Location, PropertyFeatures, PropertyImage
from estate_catalog.models.property import Property
from estate_catalog.models.provider import AuditEntry, Provider
from estate_catalog.models.user import User


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    elif hasattr(value, "__dataclass_fields__"):
        return to_dict_fast(value)
    return value


def to_dict_fast(obj: Any) -> dict:
    """Convert dataclass without deep copy.

    Uses ``dataclasses.fields()`` + ``getattr`` instead of ``asdict()``;
    nested dataclasses are handled by ``serialize_value``.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def property_to_dict(prop: Property) -> dict[str, Any]:
    """Convert a listing into a JSON-compatible document."""
    return to_dict_fast(prop)


def _parse_datetime(raw: str | None) -> datetime | None:
    return datetime.fromisoformat(raw) if raw else None


def property_from_dict(data: dict[str, Any]) -> Property:
    """Rebuild a listing from a document produced by ``property_to_dict``.

    Raises
    ------
    RepositoryError
        If the document is missing required keys or holds invalid values.
    """
    try:
        features = dict(data["features"])
        features["amenities"] = tuple(features.get("amenities") or ())
        features["utilities"] = tuple(features.get("utilities") or ())

        return Property(
            id=data["id"],
            title=data["title"],
            type=data["type"],
            category=data["category"],
            price=Decimal(str(data["price"])),
            location=Location(**data["location"]),
            features=PropertyFeatures(**features),
            description=data.get("description", ""),
            status=data.get("status", "draft"),
            currency=data.get("currency", "KES"),
            images=tuple(PropertyImage(**image) for image in data.get("images") or ()),
            provider_id=data.get("provider_id"),
            views=int(data.get("views", 0)),
            inquiries=int(data.get("inquiries", 0)),
            is_featured=bool(data.get("is_featured", False)),
            created_at=_parse_datetime(data.get("created_at")) or datetime.now(),
            updated_at=_parse_datetime(data.get("updated_at")),
            published_at=_parse_datetime(data.get("published_at")),
            rejection_reason=data.get("rejection_reason"),
            rejected_at=_parse_datetime(data.get("rejected_at")),
            rejected_by=data.get("rejected_by"),
        )
    except (KeyError, TypeError, ValueError, ArithmeticError, ValidationError) as e:
        ident = data.get("id", "?") if isinstance(data, dict) else "?"
        raise RepositoryError(f"Malformed property document {ident!r}: {e}") from e


def provider_to_dict(provider: Provider) -> dict[str, Any]:
    return to_dict_fast(provider)


def provider_from_dict(data: dict[str, Any]) -> Provider:
    """Rebuild a provider account, audit trail included.

    Raises
    ------
    RepositoryError
        If the document is missing required keys or holds invalid values.
    """
    try:
        trail = tuple(
            AuditEntry(
                actor_id=entry["actor_id"],
                action=entry["action"],
                from_status=entry["from_status"],
                to_status=entry["to_status"],
                timestamp=datetime.fromisoformat(entry["timestamp"]),
                reason=entry.get("reason"),
            )
            for entry in data.get("audit_trail") or ()
        )
        joined = data.get("joined_at")
        return Provider(
            id=data["id"],
            name=data["name"],
            email=data["email"],
            business_name=data["business_name"],
            business_email=data.get("business_email", ""),
            phone=data.get("phone", ""),
            city=data.get("city", ""),
            status=data.get("status", "pending"),
            subscription_plan=data.get("subscription_plan", "basic"),
            is_verified=bool(data.get("is_verified", False)),
            joined_at=date.fromisoformat(joined) if joined else date.today(),
            approved_at=_parse_datetime(data.get("approved_at")),
            approved_by=data.get("approved_by"),
            rejected_at=_parse_datetime(data.get("rejected_at")),
            rejected_by=data.get("rejected_by"),
            rejection_reason=data.get("rejection_reason"),
            suspended_at=_parse_datetime(data.get("suspended_at")),
            suspension_reason=data.get("suspension_reason"),
            audit_trail=trail,
        )
    except (KeyError, TypeError, ValueError) as e:
        ident = data.get("id", "?") if isinstance(data, dict) else "?"
        raise RepositoryError(f"Malformed provider document {ident!r}: {e}") from e


def user_to_dict(user: User) -> dict[str, Any]:
    return to_dict_fast(user)


def user_from_dict(data: dict[str, Any]) -> User:
    """Rebuild a user account from its document."""
    try:
        return User(
            id=data["id"],
            email=data["email"],
            name=data.get("name", ""),
            role=data.get("role", "user"),
            status=data.get("status", "active"),
            phone=data.get("phone", ""),
            created_at=_parse_datetime(data.get("created_at")) or datetime.now(),
            updated_at=_parse_datetime(data.get("updated_at")),
            suspended_at=_parse_datetime(data.get("suspended_at")),
            suspension_reason=data.get("suspension_reason"),
            deleted_at=_parse_datetime(data.get("deleted_at")),
            deletion_reason=data.get("deletion_reason"),
        )
    except (KeyError, TypeError, ValueError) as e:
        ident = data.get("id", "?") if isinstance(data, dict) else "?"
        raise RepositoryError(f"Malformed user document {ident!r}: {e}") from e


def activity_from_dict(data: dict[str, Any]) -> ActivityItem:
    """Rebuild an activity item from a message on the activity topic.

    Raises
    ------
    ValueError
        If the message is not a complete activity item.
    """
    try:
        return ActivityItem(
            id=data["id"],
            actor_id=data["actor_id"],
            action_type=data["action_type"],
            target_type=data["target_type"],
            target_id=data["target_id"],
            created_at=datetime.fromisoformat(data["created_at"]),
            details=dict(data.get("details") or {}),
        )
    except (KeyError, TypeError) as e:
        raise ValueError(f"Incomplete activity message: {e}") from e
