import pytest

from workbench.behavior import (
    ActiveSelector,
    Attack,
    IsSeeEnemy,
    Monitor,
    Parallel,
    Patrol,
    Policy,
    Repeat,
    Sequence,
    Status,
)
from workbench.tree import (
    ActionMode,
    BehaviorTree,
    BehaviorTreeBuilder,
    ConditionMode,
    build_demo_tree,
    main,
)


def test_builder_structure():
    tree = (
        BehaviorTreeBuilder()
        .sequence()
        .condition(ConditionMode.IS_SEE_ENEMY, False)
        .back()
        .action(ActionMode.ATTACK)
        .end()
    )
    assert tree.has_root()
    root = tree.root
    assert isinstance(root, Sequence)
    assert [type(c) for c in root.children] == [IsSeeEnemy, Attack]


def test_builder_nests_without_back():
    tree = BehaviorTreeBuilder().repeat(2).action(ActionMode.PATROL).end()
    assert isinstance(tree.root, Repeat)
    assert isinstance(tree.root.child, Patrol)
    assert tree.tick() is Status.SUCCESS


def test_builder_parallel_and_monitor_policies():
    tree = (
        BehaviorTreeBuilder()
        .parallel(Policy.REQUIRE_ALL, Policy.REQUIRE_ONE)
        .monitor(Policy.REQUIRE_ONE, Policy.REQUIRE_ALL)
        .end()
    )
    assert isinstance(tree.root, Parallel)
    inner = tree.root.children[0]
    assert isinstance(inner, Monitor)
    assert inner.success_policy is Policy.REQUIRE_ONE
    assert inner.failure_policy is Policy.REQUIRE_ALL


def test_end_resets_builder():
    builder = BehaviorTreeBuilder().selector()
    first = builder.end()
    second = builder.end()
    assert first.has_root()
    assert not second.has_root()


def test_back_on_empty_raises():
    with pytest.raises(RuntimeError):
        BehaviorTreeBuilder().back()


def test_adding_after_closing_root_raises():
    builder = BehaviorTreeBuilder().sequence().back()
    with pytest.raises(RuntimeError):
        builder.action(ActionMode.ATTACK)


def test_invalid_modes_raise():
    with pytest.raises(ValueError):
        BehaviorTreeBuilder().action("fly")
    with pytest.raises(ValueError):
        BehaviorTreeBuilder().condition("sleepy", False)


def test_tree_without_root_cannot_tick():
    with pytest.raises(RuntimeError):
        BehaviorTree().tick()


def test_demo_tree_shape():
    tree = build_demo_tree()
    root = tree.root
    assert isinstance(root, ActiveSelector)
    assert len(root.children) == 2
    engage, patrol = root.children
    assert isinstance(engage, Sequence)
    assert isinstance(patrol, Patrol)
    assert len(engage.children) == 2
    assert isinstance(engage.children[0], IsSeeEnemy)
    inner = engage.children[1]
    assert isinstance(inner, ActiveSelector)
    assert len(inner.children) == 2
    fight = inner.children[1]
    assert isinstance(fight, Parallel)
    assert fight.success_policy is Policy.REQUIRE_ALL
    assert fight.failure_policy is Policy.REQUIRE_ONE
    assert len(fight.children) == 2
    assert isinstance(fight.children[1], Attack)


def test_demo_tree_runs_away_when_hurt(capsys):
    tree = build_demo_tree(dice=lambda: 100)
    assert tree.tick() is Status.SUCCESS
    assert capsys.readouterr().out.splitlines() == [
        "See enemy!",
        "Health is low!",
        "Action_Runaway",
    ]


def test_demo_tree_patrols_without_enemy(capsys):
    tree = build_demo_tree(dice=lambda: 1)
    assert tree.tick() is Status.SUCCESS
    assert capsys.readouterr().out.splitlines() == ["Not see enemy", "Action_Patrol"]


def test_main_checks_for_enemy_every_frame(capsys):
    assert main(["--ticks", "4", "--seed", "7"]) == 0
    lines = capsys.readouterr().out.splitlines()
    checks = [line for line in lines if line in ("See enemy!", "Not see enemy")]
    assert len(checks) == 4
    assert lines.count("") == 4


def test_main_is_reproducible_with_seed(capsys):
    main(["--ticks", "5", "--seed", "3"])
    first = capsys.readouterr().out
    main(["--ticks", "5", "--seed", "3"])
    assert capsys.readouterr().out == first