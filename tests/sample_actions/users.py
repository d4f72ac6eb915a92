"""User administration actions."""

from __future__ import annotations

from actiondoc.framework import HttpMethod, RestAction, RestActionResult, rest_action

from sample_actions.models import AvatarForm, CreateUserForm, User, UserQuery


@rest_action(HttpMethod.GET)
class ListUsersRestAction(RestAction[UserQuery, list[User]]):
    def perform(self, model: UserQuery) -> RestActionResult[list[User]]:
        return RestActionResult(status="SUCCESS", entity=[])


@rest_action(HttpMethod.POST)
class CreateUserRestAction(RestAction[CreateUserForm, User]):
    pass


@rest_action(HttpMethod.POST)
class DeleteUserRestAction(RestAction[UserQuery, None]):
    pass


@rest_action(HttpMethod.POST)
class UploadAvatarRestAction(RestAction[AvatarForm, None]):
    pass


@rest_action(HttpMethod.PUT)
class ReplaceUserRestAction(RestAction[CreateUserForm, User]):
    pass


class AuditedListUsersRestAction(ListUsersRestAction):
    """Inherits the marker's target but is not itself marked."""
