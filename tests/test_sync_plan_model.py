from pathlib import Path

from rulesync.models import Action, ActionKind, ActionStatus, SyncPlan


def _action(
    status: ActionStatus = ActionStatus.CREATE,
    app: str | None = None,
    path: str = "/tmp/test",
) -> Action:
    return Action(
        kind=ActionKind.WRITE_TEXT,
        path=Path(path),
        status=status,
        detail="test",
        app=app,
    )


def test_summary_counts_statuses() -> None:
    plan = SyncPlan(
        actions=[
            _action(ActionStatus.CREATE),
            _action(ActionStatus.NOOP),
            _action(ActionStatus.NOOP),
            _action(ActionStatus.REMOVE),
        ],
        errors=[],
        skipped=[],
    )

    summary = plan.summary()

    assert summary["create"] == 1
    assert summary["noop"] == 2
    assert summary["remove"] == 1
    assert summary["update"] == 0
    assert summary["actions"] == 4
    assert summary["failures"] == 0


def test_changed_actions_excludes_noop() -> None:
    plan = SyncPlan(
        actions=[_action(ActionStatus.NOOP), _action(ActionStatus.UPDATE)],
        errors=[],
        skipped=[],
    )
    assert [action.status for action in plan.changed_actions()] == [ActionStatus.UPDATE]


def test_plan_with_errors_is_invalid() -> None:
    plan = SyncPlan(actions=[], errors=[ValueError("bad")], skipped=[])
    assert not plan.is_valid()
