"""Domain layer DI providers."""

from dishka import Scope, provide

from commentary.config import CommentSettings, Settings
from commentary.domain.repository import (
    CommentRepository,
    NotificationQueueRepository,
    VoteRepository,
)
from commentary.domain.service import (
    Clock,
    CommentService,
    CommentTreeBuilder,
    LinkBuilder,
    MailSender,
    ModerationService,
    NotificationService,
    ThreadService,
    VoteService,
)
from commentary.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_tree_builder(self) -> CommentTreeBuilder:
        """Provide comment tree builder (stateless)."""
        return CommentTreeBuilder()

    @provide(scope=Scope.APP)
    def get_link_builder(self, settings: Settings) -> LinkBuilder:
        """Provide link builder for mails."""
        return LinkBuilder(
            api_base_url=settings.api.base_url,
            public_url=settings.api.public_url,
            page_path_template=settings.comments.page_path_template,
        )

    @provide
    def get_thread_service(
        self,
        comment_repository: CommentRepository,
        tree_builder: CommentTreeBuilder,
        settings: CommentSettings,
    ) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(
            comment_repository=comment_repository,
            tree_builder=tree_builder,
            settings=settings,
        )

    @provide
    def get_notification_service(
        self,
        comment_repository: CommentRepository,
        queue_repository: NotificationQueueRepository,
        mail_sender: MailSender,
        thread_service: ThreadService,
        links: LinkBuilder,
        settings: CommentSettings,
        clock: Clock,
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            comment_repository=comment_repository,
            queue_repository=queue_repository,
            mail_sender=mail_sender,
            thread_service=thread_service,
            links=links,
            settings=settings,
            clock=clock,
        )

    @provide
    def get_moderation_service(
        self,
        comment_repository: CommentRepository,
        notification_service: NotificationService,
        thread_service: ThreadService,
        settings: CommentSettings,
        clock: Clock,
    ) -> ModerationService:
        """Provide moderation domain service."""
        return ModerationService(
            comment_repository=comment_repository,
            notification_service=notification_service,
            thread_service=thread_service,
            settings=settings,
            clock=clock,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        moderation_service: ModerationService,
        notification_service: NotificationService,
        thread_service: ThreadService,
        settings: CommentSettings,
        clock: Clock,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            moderation_service=moderation_service,
            notification_service=notification_service,
            thread_service=thread_service,
            settings=settings,
            clock=clock,
        )

    @provide
    def get_vote_service(
        self,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
        settings: CommentSettings,
        clock: Clock,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            comment_repository=comment_repository,
            vote_repository=vote_repository,
            settings=settings,
            clock=clock,
        )
