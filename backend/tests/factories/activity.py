"""Factories for comments, reports and notifications."""

from __future__ import annotations

import factory

from showcase.models.comment import Comment
from showcase.models.notification import Notification, NotificationType
from showcase.models.report import Report, ReportReason, ReportStatus
from tests.factories import BaseFactory
from tests.factories.project import ProjectFactory
from tests.factories.user import UserFactory


class CommentFactory(BaseFactory):
    class Meta:
        model = Comment

    id = None
    project = factory.SubFactory(ProjectFactory)
    project_id = factory.SelfAttribute("project.id")
    author = factory.SubFactory(UserFactory)
    user_id = factory.SelfAttribute("author.id")
    content = factory.Faker("sentence")


class ReportFactory(BaseFactory):
    class Meta:
        model = Report

    id = None
    project = factory.SubFactory(ProjectFactory)
    project_id = factory.SelfAttribute("project.id")
    owner_id = factory.SelfAttribute("project.user_id")
    reporter = factory.SubFactory(UserFactory)
    reporter_id = factory.SelfAttribute("reporter.id")
    reason = ReportReason.SPAM
    status = ReportStatus.PENDING


class NotificationFactory(BaseFactory):
    class Meta:
        model = Notification

    id = None
    user = factory.SubFactory(UserFactory)
    user_id = factory.SelfAttribute("user.id")
    message = factory.Faker("sentence")
    type = NotificationType.GENERAL
