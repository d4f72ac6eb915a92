"""Tests for the REST action framework surface."""

from actiondoc.framework import (
    REQUIRED_CONSTRAINTS,
    HttpMethod,
    NotBlank,
    RestAction,
    get_rest_action_info,
    is_rest_action,
    rest_action,
)

from sample_actions.users import AuditedListUsersRestAction, ListUsersRestAction


class TestRestActionMarker:
    """Test the @rest_action decorator."""

    def test_marked_class(self):
        assert get_rest_action_info(ListUsersRestAction).method is HttpMethod.GET
        assert is_rest_action(ListUsersRestAction)

    def test_marker_not_inherited(self):
        assert get_rest_action_info(AuditedListUsersRestAction) is None
        assert not is_rest_action(AuditedListUsersRestAction)

    def test_default_method_is_get(self):
        @rest_action()
        class PingRestAction(RestAction[None, str]):
            pass

        assert get_rest_action_info(PingRestAction).method is HttpMethod.GET

    def test_method_given_as_string(self):
        @rest_action("POST")
        class SubmitRestAction(RestAction[None, None]):
            pass

        assert get_rest_action_info(SubmitRestAction).method is HttpMethod.POST

    def test_non_classes(self):
        assert not is_rest_action(ListUsersRestAction())
        assert not is_rest_action("ListUsersRestAction")


class TestConstraints:
    """Test presence constraints."""

    def test_required_constraints(self):
        assert NotBlank in REQUIRED_CONSTRAINTS
        assert len(REQUIRED_CONSTRAINTS) == 3
