"""Tests for the notification inbox and the notices stores send to it."""

from datetime import datetime

import pytest

from estate_catalog.models import NotificationSeverity, PropertyStatus, Provider, UserRole, Viewer
from estate_catalog.realtime import NotificationInbox
from estate_catalog.repository import InMemoryRepository
from estate_catalog.store import CatalogStore, ProviderRegistry

NOW = datetime(2024, 7, 1, 9, 30)


@pytest.fixture
def inbox() -> NotificationInbox:
    return NotificationInbox(clock=lambda: NOW)


class TestNotificationInbox:
    """Tests for NotificationInbox."""

    def test_notify_and_list(self, inbox: NotificationInbox) -> None:
        first = inbox.notify("prov-1", "property.approved", "Approved", "Listing live")
        second = inbox.notify(
            "prov-1", "property.rejected", "Rejected", "Blurry photos", NotificationSeverity.ERROR,
            related_entity_type="property", related_entity_id="p1",
        )
        inbox.notify("prov-2", "property.approved", "Approved", "Other listing")

        assert inbox.for_recipient("prov-1") == [second, first]
        assert second.severity == NotificationSeverity.ERROR
        assert second.related_entity_id == "p1"
        assert first.created_at == NOW
        assert len(inbox) == 3

    def test_unread_count(self, inbox: NotificationInbox, provider_viewer) -> None:
        note = inbox.notify("prov-1", "x", "T", "M")
        inbox.notify("prov-1", "y", "T", "M")

        assert inbox.unread_count("prov-1") == 2
        inbox.mark_as_read(note.id, provider_viewer)
        assert inbox.unread_count("prov-1") == 1
        assert [n.type for n in inbox.for_recipient("prov-1", unread_only=True)] == ["y"]

    def test_mark_as_read(self, inbox: NotificationInbox, provider_viewer) -> None:
        note = inbox.notify("prov-1", "x", "T", "M")

        result = inbox.mark_as_read(note.id, provider_viewer)

        assert result.success
        assert result.data.is_read
        assert result.data.read_at == NOW

    def test_mark_as_read_requires_recipient(self, inbox: NotificationInbox, admin) -> None:
        note = inbox.notify("prov-1", "x", "T", "M")

        assert inbox.mark_as_read(note.id, admin).message == "Unauthorized"
        assert inbox.mark_as_read(note.id, None).message == "Not authenticated"
        assert inbox.unread_count("prov-1") == 1

    def test_mark_as_read_unknown(self, inbox: NotificationInbox, provider_viewer) -> None:
        assert inbox.mark_as_read("missing", provider_viewer).message == "Notification not found"

    def test_mark_all_as_read(self, inbox: NotificationInbox, provider_viewer) -> None:
        inbox.notify("prov-1", "x", "T", "M")
        inbox.notify("prov-1", "y", "T", "M")
        inbox.notify("prov-2", "z", "T", "M")

        result = inbox.mark_all_as_read(provider_viewer)

        assert result.message == "2 notifications marked as read"
        assert result.data == 2
        assert inbox.unread_count("prov-1") == 0
        assert inbox.unread_count("prov-2") == 1


class TestListingNotices:
    """Providers hear about moderation of their listings."""

    @pytest.fixture
    def catalog(self, make_property, inbox: NotificationInbox) -> CatalogStore:
        store = CatalogStore(
            InMemoryRepository(
                [
                    make_property(id="p1", title="Sea View", status=PropertyStatus.PENDING, provider_id="prov-1"),
                    make_property(id="p2", status=PropertyStatus.PENDING, provider_id=None),
                ]
            ),
            clock=lambda: NOW,
            notifications=inbox,
        )
        store.refresh()
        return store

    def test_approval_notifies_owner(self, catalog: CatalogStore, inbox: NotificationInbox, admin) -> None:
        catalog.approve_property("p1", admin)

        [note] = inbox.for_recipient("prov-1")
        assert note.type == "property.approved"
        assert note.title == "Property approved"
        assert note.message == '"Sea View" is now published'
        assert note.severity == NotificationSeverity.SUCCESS
        assert (note.related_entity_type, note.related_entity_id) == ("property", "p1")

    def test_rejection_carries_reason(self, catalog: CatalogStore, inbox: NotificationInbox, admin) -> None:
        catalog.reject_property("p1", admin, "Photos missing")

        [note] = inbox.for_recipient("prov-1")
        assert note.type == "property.rejected"
        assert note.message == "Photos missing"
        assert note.severity == NotificationSeverity.ERROR

    def test_unowned_listing_sends_nothing(self, catalog: CatalogStore, inbox: NotificationInbox, admin) -> None:
        catalog.approve_property("p2", admin)

        assert len(inbox) == 0

    def test_refused_action_sends_nothing(
        self, catalog: CatalogStore, inbox: NotificationInbox, provider_viewer
    ) -> None:
        catalog.approve_property("p1", provider_viewer)

        assert len(inbox) == 0


class TestProviderNotices:
    """Providers hear about decisions on their account."""

    @pytest.fixture
    def registry(self, inbox: NotificationInbox) -> ProviderRegistry:
        return ProviderRegistry(
            [Provider(id="prov-1", name="A", email="a@example.com", business_name="A Realty")],
            notifications=inbox,
            clock=lambda: NOW,
        )

    def test_approval(self, registry: ProviderRegistry, inbox: NotificationInbox, admin) -> None:
        registry.approve("prov-1", admin)

        [note] = inbox.for_recipient("prov-1")
        assert note.type == "provider.approved"
        assert note.title == "Your provider account has been approved"
        assert note.severity == NotificationSeverity.SUCCESS
        assert note.related_entity_id == "prov-1"

    def test_rejection_with_reason(self, registry: ProviderRegistry, inbox: NotificationInbox, admin) -> None:
        registry.reject("prov-1", admin, "Licence expired")

        [note] = inbox.for_recipient("prov-1")
        assert note.type == "provider.rejected"
        assert note.message == "Licence expired"
        assert note.severity == NotificationSeverity.ERROR

    def test_provider_reads_own_notice(self, registry: ProviderRegistry, inbox: NotificationInbox, admin) -> None:
        registry.approve("prov-1", admin)
        owner = Viewer(id="prov-1", role=UserRole.PROVIDER)

        assert inbox.mark_all_as_read(owner).data == 1
        assert inbox.unread_count("prov-1") == 0

    def test_illegal_move_sends_nothing(self, registry: ProviderRegistry, inbox: NotificationInbox, admin) -> None:
        registry.suspend("prov-1", admin)

        assert len(inbox) == 0
