"""Unit tests for the Group entity."""

from datetime import datetime, timedelta

from domain.entities.group import GroupStatus, Identity
from tests.unit.conftest import NOW, make_group

OWNER = Identity(name="Olive Owner", email="owner@example.com")


class TestGroupStatus:
    def test_active_before_start(self):
        group = make_group(OWNER, start_date=NOW + timedelta(seconds=1))

        assert group.status(NOW) is GroupStatus.ACTIVE
        assert group.is_active(NOW)

    def test_past_at_start(self):
        group = make_group(OWNER, start_date=NOW)

        assert group.status(NOW) is GroupStatus.PAST
        assert not group.is_active(NOW)

    def test_defaults_to_current_time(self):
        group = make_group(OWNER, start_date=datetime.utcnow() - timedelta(minutes=1))

        assert group.status() is GroupStatus.PAST


class TestGroupMembership:
    def test_member_count_and_full(self):
        group = make_group(OWNER, max_members=2, member_emails=("a@x.io", "b@x.io"))

        assert group.member_count == 2
        assert group.is_full

    def test_not_full_below_capacity(self):
        group = make_group(OWNER, max_members=3, member_emails=("a@x.io",))

        assert not group.is_full

    def test_has_member_matches_email_exactly(self):
        group = make_group(OWNER, member_emails=("a@x.io",))

        assert group.has_member("a@x.io")
        assert not group.has_member("A@x.io")

    def test_is_owned_by(self):
        group = make_group(OWNER)

        assert group.is_owned_by("owner@example.com")
        assert not group.is_owned_by("someone@example.com")
