"""NotificationService: strictly owner-only inbox."""

from __future__ import annotations

import pytest

from showcase.models.notification import NotificationStatus
from showcase.services._shared.errors import AuthorizationError, NotFoundError
from showcase.services.notifications.dto import NotificationCreateIn
from showcase.services.notifications.service import NotificationService
from tests.factories.activity import NotificationFactory
from tests.factories.user import AdminFactory, UserFactory
from tests.helpers.auth import context_for


def _service(user) -> NotificationService:
    return NotificationService(ctx=context_for(user))


def test_list_mine_only(session):
    mine = NotificationFactory()
    NotificationFactory()

    items = _service(mine.user).list_mine()

    assert [n.id for n in items] == [mine.id]


def test_mark_read_by_owner(session):
    notification = NotificationFactory()

    out = _service(notification.user).mark_read(notification.id)

    assert out.status == NotificationStatus.READ.value


def test_mark_read_of_other_inbox_is_refused_even_for_admin(session):
    notification = NotificationFactory()

    with pytest.raises(AuthorizationError):
        _service(UserFactory()).mark_read(notification.id)
    with pytest.raises(AuthorizationError):
        _service(AdminFactory()).mark_read(notification.id)


def test_mark_read_missing_is_404(session):
    with pytest.raises(NotFoundError):
        _service(UserFactory()).mark_read(555_555)


def test_mark_all_read_counts(session):
    user = UserFactory()
    NotificationFactory(user=user)
    NotificationFactory(user=user)
    NotificationFactory(user=user, status=NotificationStatus.READ)

    assert _service(user).mark_all_read() == 2
    assert _service(user).mark_all_read() == 0


def test_create_requires_existing_recipient(session):
    admin = AdminFactory()

    with pytest.raises(NotFoundError):
        _service(admin).create(NotificationCreateIn(user_id=404_404, message="hello"))

    recipient = UserFactory()
    out = _service(admin).create(NotificationCreateIn(user_id=recipient.id, message=" hi "))
    assert out.message == "hi"
    assert out.type == "GENERAL"
