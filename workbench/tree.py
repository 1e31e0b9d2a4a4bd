"""Behaviour trees and a fluent builder for them."""

from __future__ import annotations

import argparse
import random
from enum import Enum
from typing import Callable, Optional

from workbench.behavior import (
    ActiveSelector,
    Attack,
    Behavior,
    Filter,
    IsEnemyDead,
    IsHealthLow,
    IsSeeEnemy,
    Monitor,
    Parallel,
    Patrol,
    Policy,
    Repeat,
    Runaway,
    Selector,
    Sequence,
    Status,
)


class ActionMode(Enum):
    ATTACK = "attack"
    PATROL = "patrol"
    RUNAWAY = "runaway"


class ConditionMode(Enum):
    IS_SEE_ENEMY = "is_see_enemy"
    IS_HEALTH_LOW = "is_health_low"
    IS_ENEMY_DEAD = "is_enemy_dead"


_ACTIONS = {
    ActionMode.ATTACK: Attack,
    ActionMode.PATROL: Patrol,
    ActionMode.RUNAWAY: Runaway,
}

_CONDITIONS = {
    ConditionMode.IS_SEE_ENEMY: IsSeeEnemy,
    ConditionMode.IS_HEALTH_LOW: IsHealthLow,
    ConditionMode.IS_ENEMY_DEAD: IsEnemyDead,
}


class BehaviorTree:
    """A tree of behaviours ticked from its root."""

    def __init__(self, root: Optional[Behavior] = None) -> None:
        self.root = root

    def tick(self) -> Status:
        """Tick the root once and return its status."""
        if self.root is None:
            raise RuntimeError("behaviour tree has no root")
        return self.root.tick()

    def has_root(self) -> bool:
        return self.root is not None


class BehaviorTreeBuilder:
    """Build a tree in pre-order: each node becomes the parent of the next
    until :meth:`back` returns to its parent; :meth:`end` finishes."""

    def __init__(self, dice: Optional[Callable[[], int]] = None) -> None:
        self._dice = dice
        self._root: Optional[Behavior] = None
        self._stack: list[Behavior] = []

    def _add(self, node: Behavior) -> BehaviorTreeBuilder:
        if self._root is None:
            self._root = node
        elif not self._stack:
            raise RuntimeError("no open node to attach a child to")
        else:
            self._stack[-1].add_child(node)
        self._stack.append(node)
        return self

    def sequence(self) -> BehaviorTreeBuilder:
        return self._add(Sequence())

    def action(self, mode: ActionMode) -> BehaviorTreeBuilder:
        try:
            cls = _ACTIONS[mode]
        except KeyError:
            raise ValueError(f"unknown action mode {mode!r}") from None
        return self._add(cls())

    def condition(self, mode: ConditionMode, negation: bool) -> BehaviorTreeBuilder:
        try:
            cls = _CONDITIONS[mode]
        except KeyError:
            raise ValueError(f"unknown condition mode {mode!r}") from None
        return self._add(cls(negation, dice=self._dice))

    def selector(self) -> BehaviorTreeBuilder:
        return self._add(Selector())

    def repeat(self, count: int) -> BehaviorTreeBuilder:
        return self._add(Repeat(count))

    def active_selector(self) -> BehaviorTreeBuilder:
        return self._add(ActiveSelector())

    def filter(self) -> BehaviorTreeBuilder:
        return self._add(Filter())

    def parallel(self, success: Policy, failure: Policy) -> BehaviorTreeBuilder:
        return self._add(Parallel(success, failure))

    def monitor(self, success: Policy, failure: Policy) -> BehaviorTreeBuilder:
        return self._add(Monitor(success, failure))

    def back(self) -> BehaviorTreeBuilder:
        """Close the current node and return to its parent."""
        if not self._stack:
            raise RuntimeError("no open node to close")
        self._stack.pop()
        return self

    def end(self) -> BehaviorTree:
        """Return the finished tree and reset the builder."""
        self._stack.clear()
        tree = BehaviorTree(self._root)
        self._root = None
        return tree


def build_demo_tree(dice: Optional[Callable[[], int]] = None) -> BehaviorTree:
    """Build the sample guard AI: flee or fight when an enemy is seen, else patrol."""
    return (
        BehaviorTreeBuilder(dice)
        .active_selector()
        .sequence()
        .condition(ConditionMode.IS_SEE_ENEMY, False)
        .back()
        .active_selector()
        .sequence()
        .condition(ConditionMode.IS_HEALTH_LOW, False)
        .back()
        .action(ActionMode.RUNAWAY)
        .back()
        .back()
        .parallel(Policy.REQUIRE_ALL, Policy.REQUIRE_ONE)
        .condition(ConditionMode.IS_ENEMY_DEAD, True)
        .back()
        .action(ActionMode.ATTACK)
        .back()
        .back()
        .back()
        .back()
        .action(ActionMode.PATROL)
        .end()
    )


def main(argv=None) -> int:
    """Tick the sample tree a number of times, one frame per tick."""
    parser = argparse.ArgumentParser(description="Run the sample behaviour tree.")
    parser.add_argument("--ticks", type=int, default=10, help="number of frames")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)

    dice = None
    if args.seed is not None:
        rng = random.Random(args.seed)
        dice = lambda: rng.randint(1, 100)  # noqa: E731

    tree = build_demo_tree(dice)
    for _ in range(args.ticks):
        tree.tick()
        print()
    return 0