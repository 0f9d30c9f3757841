"""授权引擎测试 -- 角色 x 归属 x 动作"""

import pytest
from tasktracker.access import (
    Action,
    can_act,
    ensure_admin,
    ensure_can_act,
    ensure_can_query,
    is_assignee,
    update_action_for,
)
from tasktracker.core.exceptions import PermissionDeniedError
from tasktracker.core.models import Task, UserRef


class TestCanAct:
    """can_act 判定表"""

    @pytest.mark.parametrize("action", list(Action))
    def test_admin_allowed_everything(self, admin, task, action):
        assert can_act(admin, task, action)

    @pytest.mark.parametrize("action", [Action.READ, Action.UPDATE_PARTIAL, Action.COMMENT])
    def test_owner_actions(self, author, assignee, stranger, task, action):
        assert can_act(author, task, action)
        assert can_act(assignee, task, action)
        assert not can_act(stranger, task, action)

    def test_delete_only_author(self, author, assignee, stranger, task):
        assert can_act(author, task, Action.DELETE)
        assert not can_act(assignee, task, Action.DELETE)
        assert not can_act(stranger, task, Action.DELETE)

    def test_full_update_only_admin(self, author, assignee, task):
        assert not can_act(author, task, Action.UPDATE_FULL)
        assert not can_act(assignee, task, Action.UPDATE_FULL)

    def test_null_assignee_is_not_assignee(self, assignee):
        unassigned = Task(title="t", author=UserRef(id=1))
        assert not is_assignee(assignee, unassigned)
        assert not can_act(assignee, unassigned, Action.READ)


class TestEnsure:
    """抛出式检查"""

    def test_ensure_can_act_raises(self, assignee, task):
        with pytest.raises(PermissionDeniedError) as exc_info:
            ensure_can_act(assignee, task, Action.DELETE)
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "You don't have permission"

    def test_ensure_admin(self, admin, author):
        ensure_admin(admin)
        with pytest.raises(PermissionDeniedError):
            ensure_admin(author)

    def test_update_action_for(self, admin, author):
        assert update_action_for(admin) == Action.UPDATE_FULL
        assert update_action_for(author) == Action.UPDATE_PARTIAL


class TestEnsureCanQuery:
    """列表查询可见性"""

    def test_admin_any_ids(self, admin):
        ensure_can_query(admin, 1, 2)
        ensure_can_query(admin, None, None)

    def test_own_ids_allowed(self, author):
        ensure_can_query(author, 1, None)
        ensure_can_query(author, None, 1)
        ensure_can_query(author, 1, 1)
        ensure_can_query(author, None, None)

    @pytest.mark.parametrize("author_id, assignee_id", [(2, None), (None, 2), (1, 2)])
    def test_other_ids_denied(self, author, author_id, assignee_id):
        with pytest.raises(PermissionDeniedError):
            ensure_can_query(author, author_id, assignee_id)
