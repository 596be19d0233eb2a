"""Domain models for the property catalog."""

from estate_catalog.models.activity import ActionResult, ActivityItem
from estate_catalog.models.base import Location, PropertyFeatures, PropertyImage
from estate_catalog.models.enums import (
    AreaUnit,
    NotificationSeverity,
    PropertyCategory,
    PropertyStatus,
    PropertyType,
    ProviderStatus,
    SortBy,
    SortOrder,
    SubscriptionPlan,
    UserRole,
    UserStatus,
)
from estate_catalog.models.filters import FilterSpec
from estate_catalog.models.notification import Notification
from estate_catalog.models.property import Property
from estate_catalog.models.provider import AuditEntry, Provider, ProviderRegistration
from estate_catalog.models.submission import PropertySubmission, PropertyUpdate
from estate_catalog.models.user import User, UserStats, Viewer

__all__ = [
    "ActionResult",
    "ActivityItem",
    "AreaUnit",
    "AuditEntry",
    "FilterSpec",
    "Location",
    "Notification",
    "NotificationSeverity",
    "Property",
    "PropertyCategory",
    "PropertyFeatures",
    "PropertyImage",
    "PropertyStatus",
    "PropertySubmission",
    "PropertyType",
    "PropertyUpdate",
    "Provider",
    "ProviderRegistration",
    "ProviderStatus",
    "SortBy",
    "SortOrder",
    "SubscriptionPlan",
    "User",
    "UserRole",
    "UserStats",
    "UserStatus",
    "Viewer",
]
