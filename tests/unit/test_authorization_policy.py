"""Tests for AuthorizationPolicy decisions."""

import pytest

from app.application.dtos.user import UserResult
from app.application.services.authorization_policy import Action, AuthorizationPolicy
from app.domain.entities.task import TaskEntity
from app.domain.enums import UserRole
from app.domain.exceptions import AuthorizationException, InactiveAccountException

policy = AuthorizationPolicy()

ADMIN = UserResult(id="a1", name="Admin", email="a@x.io", role=UserRole.ADMIN)
MEMBER = UserResult(id="m1", name="Member", email="m@x.io", role=UserRole.MEMBER)
INACTIVE_ADMIN = UserResult(
    id="a2", name="Old", email="o@x.io", role=UserRole.ADMIN, is_active=False
)


def _task(assigned_to: list[str]) -> TaskEntity:
    return TaskEntity.create(title="T", created_by="a1", assigned_to=assigned_to)


class TestAdmin:
    @pytest.mark.parametrize("action", list(Action))
    def test_admin_may_do_everything(self, action: Action) -> None:
        assert policy.can(ADMIN, action, task=_task([]), target_user_id="x")


class TestMember:
    @pytest.mark.parametrize(
        "action",
        [
            Action.TASK_CREATE,
            Action.TASK_UPDATE,
            Action.TASK_DELETE,
            Action.TASK_LIST_ALL,
            Action.USER_LIST,
            Action.USER_UPDATE,
            Action.USER_DELETE,
            Action.REPORT_EXPORT,
        ],
    )
    def test_admin_only_actions_denied(self, action: Action) -> None:
        assert not policy.can(MEMBER, action, task=_task(["m1"]))

    @pytest.mark.parametrize(
        "action",
        [Action.TASK_READ, Action.TASK_UPDATE_STATUS, Action.TASK_UPDATE_CHECKLIST],
    )
    def test_assignee_actions(self, action: Action) -> None:
        assert policy.can(MEMBER, action, task=_task(["m1", "m2"]))
        assert not policy.can(MEMBER, action, task=_task(["m2"]))
        assert not policy.can(MEMBER, action)

    def test_reads_only_own_user_record(self) -> None:
        assert policy.can(MEMBER, Action.USER_READ, target_user_id="m1")
        assert not policy.can(MEMBER, Action.USER_READ, target_user_id="m2")


class TestInactive:
    @pytest.mark.parametrize("action", list(Action))
    def test_inactive_denied_everything(self, action: Action) -> None:
        assert not policy.can(INACTIVE_ADMIN, action, task=_task(["a2"]))

    def test_require_raises_inactive(self) -> None:
        with pytest.raises(InactiveAccountException):
            policy.require(INACTIVE_ADMIN, Action.TASK_READ)

    def test_ensure_active_rejects_missing_principal(self) -> None:
        with pytest.raises(InactiveAccountException):
            AuthorizationPolicy.ensure_active(None)


def test_require_raises_permission_denied_with_details() -> None:
    with pytest.raises(AuthorizationException) as exc_info:
        policy.require(MEMBER, Action.TASK_DELETE)
    err = exc_info.value
    assert err.error_code == "PERMISSION_DENIED"
    assert err.details == {"resource": "task", "action": "delete"}


def test_action_code_parts() -> None:
    assert Action.TASK_UPDATE_STATUS.resource == "task"
    assert Action.TASK_UPDATE_STATUS.verb == "update_status"
