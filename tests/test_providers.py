"""Tests for the provider registry and approval state machine."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from estate_catalog.exceptions import InvalidEntityStateError, RepositoryError
from estate_catalog.models import Provider, ProviderRegistration, ProviderStatus
from estate_catalog.repository import InMemoryRepository
from estate_catalog.store import TRANSITIONS, ProviderRegistry, transition
from estate_catalog.store.base import GENERIC_FAILURE

NOW = datetime(2024, 7, 1, 9, 30)


def make_registration(**overrides) -> ProviderRegistration:
    defaults = {
        "name": "Jane Wanjiru",
        "email": "Jane@Example.com",
        "phone": "+254700000000",
        "business_name": "Wanjiru Homes",
        "business_email": "info@wanjiru.example.com",
        "business_phone": "+254711111111",
        "city": "Nairobi",
    }
    defaults.update(overrides)
    return ProviderRegistration(**defaults)


@pytest.fixture
def registry() -> ProviderRegistry:
    return ProviderRegistry(
        [
            Provider(id="pending-1", name="A", email="a@example.com", business_name="A Realty"),
            Provider(
                id="approved-1", name="B", email="b@example.com", business_name="B Homes",
                status=ProviderStatus.APPROVED,
            ),
        ],
        clock=lambda: NOW,
    )


class TestTransitionTable:
    """Tests for the status transition table."""

    @pytest.mark.parametrize(
        "current,target",
        [
            (ProviderStatus.PENDING, ProviderStatus.APPROVED),
            (ProviderStatus.PENDING, ProviderStatus.REJECTED),
            (ProviderStatus.APPROVED, ProviderStatus.SUSPENDED),
            (ProviderStatus.SUSPENDED, ProviderStatus.APPROVED),
        ],
    )
    def test_allowed(self, current, target) -> None:
        assert transition(current, target) == target

    @pytest.mark.parametrize(
        "current,target",
        [
            (ProviderStatus.PENDING, ProviderStatus.SUSPENDED),
            (ProviderStatus.REJECTED, ProviderStatus.APPROVED),
            (ProviderStatus.APPROVED, ProviderStatus.REJECTED),
            (ProviderStatus.APPROVED, ProviderStatus.APPROVED),
        ],
    )
    def test_forbidden(self, current, target) -> None:
        with pytest.raises(InvalidEntityStateError):
            transition(current, target)

    def test_rejected_is_terminal(self) -> None:
        assert TRANSITIONS[ProviderStatus.REJECTED] == frozenset()


class TestRegister:
    """Tests for register."""

    def test_creates_pending_provider(self, registry: ProviderRegistry) -> None:
        result = registry.register(make_registration())

        assert result.success
        provider = result.data
        assert provider.status == ProviderStatus.PENDING
        assert provider.email == "jane@example.com"
        assert provider.joined_at == NOW.date()
        assert registry.get(provider.id) == provider
        assert registry.activity_log.recent(1)[0].action_type == "provider.registered"

    def test_duplicate_email(self, registry: ProviderRegistry) -> None:
        registry.register(make_registration())

        result = registry.register(make_registration(email="jane@example.com "))

        assert not result.success
        assert result.message == "A provider with this email already exists"

    def test_duplicate_business_email(self, registry: ProviderRegistry) -> None:
        registry.register(make_registration())

        result = registry.register(
            make_registration(email="other@example.com", business_email="INFO@wanjiru.example.com")
        )

        assert result.message == "A provider with this email already exists"

    def test_missing_fields(self, registry: ProviderRegistry) -> None:
        assert not registry.register(make_registration(email=""))
        assert not registry.register(make_registration(business_name=" "))


class TestAdminActions:
    """Tests for approve, reject, suspend and reinstate."""

    def test_approve(self, registry: ProviderRegistry, admin) -> None:
        result = registry.approve("pending-1", admin)

        assert result.success
        provider = registry.get("pending-1")
        assert provider.status == ProviderStatus.APPROVED
        assert provider.is_verified
        assert provider.approved_by == admin.id
        assert provider.approved_at == NOW

    def test_audit_trail(self, registry: ProviderRegistry, admin) -> None:
        """Test each transition appends an audit entry."""
        registry.approve("pending-1", admin)
        registry.suspend("pending-1", admin, reason="Fake listings")
        registry.reinstate("pending-1", admin)

        trail = registry.audit_entries("pending-1")
        assert [e.action for e in trail] == ["approved", "suspended", "reinstated"]
        assert trail[1].from_status == ProviderStatus.APPROVED
        assert trail[1].to_status == ProviderStatus.SUSPENDED
        assert trail[1].reason == "Fake listings"
        assert all(e.actor_id == admin.id and e.timestamp == NOW for e in trail)

        provider = registry.get("pending-1")
        assert provider.status == ProviderStatus.APPROVED
        assert provider.suspension_reason is None

    def test_reject(self, registry: ProviderRegistry, admin) -> None:
        registry.reject("pending-1", admin, reason="Incomplete documents")

        provider = registry.get("pending-1")
        assert provider.status == ProviderStatus.REJECTED
        assert provider.rejection_reason == "Incomplete documents"
        assert provider.rejected_by == admin.id

    def test_non_admin_unauthorized(self, registry: ProviderRegistry, provider_viewer) -> None:
        result = registry.approve("pending-1", provider_viewer)

        assert result.message == "Unauthorized"
        assert registry.get("pending-1").status == ProviderStatus.PENDING

    def test_anonymous_unauthorized(self, registry: ProviderRegistry) -> None:
        assert registry.suspend("approved-1", None).message == "Unauthorized"

    def test_not_found(self, registry: ProviderRegistry, admin) -> None:
        assert registry.approve("missing", admin).message == "Provider not found"

    def test_illegal_transition_fails(self, registry: ProviderRegistry, admin) -> None:
        """Test that an illegal move is refused and leaves the provider untouched."""
        result = registry.suspend("pending-1", admin)

        assert not result.success
        assert result.message == "Cannot move provider from pending to suspended"
        assert registry.get("pending-1").status == ProviderStatus.PENDING
        assert registry.audit_entries("pending-1") == ()
        assert len(registry.activity_log) == 0

    def test_double_approve_fails(self, registry: ProviderRegistry, admin) -> None:
        assert registry.approve("pending-1", admin).success

        result = registry.approve("pending-1", admin)

        assert not result.success
        assert result.message == "Cannot move provider from approved to approved"
        assert len(registry.audit_entries("pending-1")) == 1

    def test_status_lists(self, registry: ProviderRegistry, admin) -> None:
        assert [p.id for p in registry.pending_providers()] == ["pending-1"]

        registry.approve("pending-1", admin)

        assert [p.id for p in registry.approved_providers()] == ["pending-1", "approved-1"]
        assert registry.pending_providers() == []

        registry.suspend("approved-1", admin)

        assert [p.id for p in registry.suspended_providers()] == ["approved-1"]
        assert registry.rejected_providers() == []


class FailingProviderRepository(InMemoryRepository):
    def save(self, items) -> None:
        raise RepositoryError("disk full")


class TestPersistence:
    """Tests for ProviderRegistry backed by a repository."""

    def test_changes_are_saved(self, admin) -> None:
        repository = InMemoryRepository(
            [Provider(id="pending-1", name="A", email="a@example.com", business_name="A Realty")]
        )
        registry = ProviderRegistry(repository=repository, clock=lambda: NOW, id_factory=lambda: "new-1")

        assert registry.refresh().data == 1
        registry.approve("pending-1", admin)
        registry.register(make_registration())

        assert repository.save_count == 2
        saved = {p.id: p for p in repository.load()}
        assert saved["pending-1"].status == ProviderStatus.APPROVED
        assert saved["new-1"].status == ProviderStatus.PENDING

    def test_failed_save_leaves_registry_unchanged(self, admin) -> None:
        pending = Provider(id="pending-1", name="A", email="a@example.com", business_name="A Realty")
        registry = ProviderRegistry([pending], repository=FailingProviderRepository(), clock=lambda: NOW)

        result = registry.approve("pending-1", admin)

        assert not result.success
        assert result.message == GENERIC_FAILURE
        assert result.error == "disk full"
        assert registry.get("pending-1") == pending
        assert len(registry.activity_log) == 0

    def test_failed_registration_not_kept(self) -> None:
        registry = ProviderRegistry(repository=FailingProviderRepository())

        result = registry.register(make_registration())

        assert result.message == GENERIC_FAILURE
        assert len(registry) == 0

    def test_refresh_failure(self) -> None:
        repository = MagicMock()
        repository.load.side_effect = RepositoryError("unreadable")
        registry = ProviderRegistry(
            [Provider(id="p1", name="A", email="a@example.com", business_name="A")], repository=repository
        )

        result = registry.refresh()

        assert not result.success
        assert result.error == "unreadable"
        assert len(registry) == 1
