"""Enumeration types for catalog entities."""

from enum import Enum


class PropertyType(str, Enum):
    HOUSE = "house"
    APARTMENT = "apartment"
    LAND = "land"
    COMMERCIAL = "commercial"
    AIRBNB = "airbnb"


class PropertyCategory(str, Enum):
    SALE = "sale"
    RENT = "rent"
    SHORT_TERM_RENTAL = "short-term-rental"
    LEASE = "lease"
    DEVELOPMENT_RIGHTS = "development_rights"


class PropertyStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    PUBLISHED = "published"
    REJECTED = "rejected"
    SOLD = "sold"
    RENTED = "rented"


class AreaUnit(str, Enum):
    SQFT = "sqft"
    SQM = "sqm"
    ACRES = "acres"
    HECTARES = "hectares"


class SortBy(str, Enum):
    PRICE = "price"
    DATE = "date"
    VIEWS = "views"
    AREA = "area"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class UserRole(str, Enum):
    ADMIN = "admin"
    PROVIDER = "provider"
    USER = "user"


class ProviderStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SUSPENDED = "suspended"


class SubscriptionPlan(str, Enum):
    BASIC = "basic"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"


class UserStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"


class NotificationSeverity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
