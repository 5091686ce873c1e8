"""Authorization policy: role and assignment checks for every protected action.

Decisions are pure (no I/O). Callers load the task or target user first and
pass it in, so a missing resource is reported as not-found before the policy
is consulted.
"""

from __future__ import annotations

from enum import Enum

from app.application.dtos.user import UserResult
from app.domain.entities.task import TaskEntity
from app.domain.exceptions import AuthorizationException, InactiveAccountException


class Action(str, Enum):
    """Protected actions as resource:action codes."""

    TASK_CREATE = "task:create"
    TASK_UPDATE = "task:update"
    TASK_DELETE = "task:delete"
    TASK_READ = "task:read"
    TASK_LIST_ALL = "task:list_all"
    TASK_UPDATE_STATUS = "task:update_status"
    TASK_UPDATE_CHECKLIST = "task:update_checklist"
    USER_LIST = "user:list"
    USER_READ = "user:read"
    USER_UPDATE = "user:update"
    USER_DELETE = "user:delete"
    USER_ASSIGN_ROLE = "user:assign_role"
    REPORT_EXPORT = "report:export"

    @property
    def resource(self) -> str:
        return self.value.split(":", 1)[0]

    @property
    def verb(self) -> str:
        return self.value.split(":", 1)[1]


_ADMIN_ONLY = frozenset(
    {
        Action.TASK_CREATE,
        Action.TASK_UPDATE,
        Action.TASK_DELETE,
        Action.TASK_LIST_ALL,
        Action.USER_LIST,
        Action.USER_UPDATE,
        Action.USER_DELETE,
        Action.USER_ASSIGN_ROLE,
        Action.REPORT_EXPORT,
    }
)

_ASSIGNEE_ALLOWED = frozenset(
    {Action.TASK_READ, Action.TASK_UPDATE_STATUS, Action.TASK_UPDATE_CHECKLIST}
)


class AuthorizationPolicy:
    """Centralized allow/deny decisions from principal role and task assignment."""

    def can(
        self,
        principal: UserResult,
        action: Action,
        *,
        task: TaskEntity | None = None,
        target_user_id: str | None = None,
    ) -> bool:
        """Return True if principal may perform action on the given target.

        Inactive principals are denied everything. Admins may do anything.
        Members may read and progress tasks they are assigned to and read
        their own user record.
        """
        if not principal.is_active:
            return False
        if principal.is_admin:
            return True
        if action in _ADMIN_ONLY:
            return False
        if action in _ASSIGNEE_ALLOWED:
            return task is not None and task.is_assigned(principal.id)
        if action == Action.USER_READ:
            return target_user_id is not None and target_user_id == principal.id
        return False

    def require(
        self,
        principal: UserResult,
        action: Action,
        *,
        task: TaskEntity | None = None,
        target_user_id: str | None = None,
    ) -> None:
        """Raise if principal may not perform action.

        Raises:
            InactiveAccountException: Principal is deactivated.
            AuthorizationException: Role or assignment does not allow the action.
        """
        self.ensure_active(principal)
        if not self.can(
            principal, action, task=task, target_user_id=target_user_id
        ):
            raise AuthorizationException(resource=action.resource, action=action.verb)

    @staticmethod
    def ensure_active(principal: UserResult | None) -> UserResult:
        """Return principal if it exists and is active; raise InactiveAccountException otherwise."""
        if principal is None or not principal.is_active:
            raise InactiveAccountException()
        return principal
