"""Application layer DI providers."""

from dishka import Scope, provide

from commentary.application.usecase.comment import (
    DeleteCommentUseCase,
    GetCommentsUseCase,
    LocateCommentUseCase,
    SubmitCommentUseCase,
)
from commentary.application.usecase.moderation import (
    RemoteActionUseCase,
    SetStatusUseCase,
)
from commentary.application.usecase.notification import (
    DispatchNotificationsUseCase,
)
from commentary.application.usecase.vote import CastVoteUseCase
from commentary.domain.service import (
    CommentService,
    LinkBuilder,
    ModerationService,
    NotificationService,
    ThreadService,
    VoteService,
)
from commentary.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, thread_service: ThreadService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(thread_service=thread_service)

    @provide(scope=Scope.REQUEST)
    def get_submit_comment_use_case(
        self, comment_service: CommentService
    ) -> SubmitCommentUseCase:
        """Provide submit comment use case."""
        return SubmitCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_locate_comment_use_case(
        self, thread_service: ThreadService, links: LinkBuilder
    ) -> LocateCommentUseCase:
        """Provide locate comment use case."""
        return LocateCommentUseCase(thread_service=thread_service, links=links)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    # Moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_remote_action_use_case(
        self,
        moderation_service: ModerationService,
        notification_service: NotificationService,
    ) -> RemoteActionUseCase:
        """Provide remote action use case."""
        return RemoteActionUseCase(
            moderation_service=moderation_service,
            notification_service=notification_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_set_status_use_case(
        self, moderation_service: ModerationService
    ) -> SetStatusUseCase:
        """Provide set status use case."""
        return SetStatusUseCase(moderation_service=moderation_service)

    # Notification use cases
    @provide(scope=Scope.REQUEST)
    def get_dispatch_notifications_use_case(
        self, notification_service: NotificationService
    ) -> DispatchNotificationsUseCase:
        """Provide dispatch notifications use case."""
        return DispatchNotificationsUseCase(
            notification_service=notification_service
        )
