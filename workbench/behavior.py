"""Behaviour-tree nodes: composites, decorators, conditions and actions."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional

_rng = random.Random()


def _roll() -> int:
    """Return a random integer from 1 to 100."""
    return _rng.randint(1, 100)


class Status(Enum):
    """State of a behaviour node."""

    INVALID = "invalid"
    SUCCESS = "success"
    FAILURE = "failure"
    RUNNING = "running"
    ABORTED = "aborted"


class Policy(Enum):
    """How a node with several children decides its result."""

    REQUIRE_ONE = "require_one"
    REQUIRE_ALL = "require_all"


class Behavior(ABC):
    """Base node: ticking runs initialise, update and terminate hooks."""

    name = "Behavior"

    def __init__(self) -> None:
        self.status = Status.INVALID
        self.child: Optional[Behavior] = None

    def tick(self) -> Status:
        """Run one update, initialising first unless already running."""
        if self.status is not Status.RUNNING:
            self._on_initialize()
        self.status = self._update()
        if self.status is not Status.RUNNING:
            self._on_terminate()
        return self.status

    def reset(self) -> None:
        """Return the node to its initial state."""
        self.status = Status.INVALID

    def abort(self) -> None:
        """Terminate the node and mark it aborted."""
        self._on_terminate()
        self.status = Status.ABORTED

    def is_terminated(self) -> bool:
        return self.status in (Status.SUCCESS, Status.FAILURE)

    def is_running(self) -> bool:
        return self.status is Status.RUNNING

    def is_success(self) -> bool:
        return self.status is Status.SUCCESS

    def is_failure(self) -> bool:
        return self.status is Status.FAILURE

    def add_child(self, child: Behavior) -> None:
        """Attach the single child of this node."""
        self.child = child

    def _on_initialize(self) -> None:
        pass

    def _on_terminate(self) -> None:
        pass

    @abstractmethod
    def _update(self) -> Status:
        """Compute this tick's status."""


class Repeat(Behavior):
    """Tick the child until it has succeeded ``limit`` times in one update."""

    name = "Repeat"

    def __init__(self, limit: int = 3) -> None:
        super().__init__()
        if limit < 1:
            raise ValueError("repeat limit must be at least 1")
        self.limit = limit
        self.count = 0

    def _on_initialize(self) -> None:
        self.count = 0

    def _update(self) -> Status:
        if self.child is None:
            raise RuntimeError("repeat node has no child")
        while True:
            self.child.tick()
            if self.child.is_running():
                return Status.SUCCESS
            if self.child.is_failure():
                return Status.FAILURE
            self.count += 1
            if self.count == self.limit:
                return Status.SUCCESS
            self.child.reset()


class Composite(Behavior):
    """A node with an ordered list of children."""

    name = "Composite"

    def __init__(self) -> None:
        super().__init__()
        self.children: list[Behavior] = []
        self._index = 0

    def add_child(self, child: Behavior) -> None:
        self.children.append(child)

    def remove_child(self, child: Behavior) -> None:
        """Remove ``child`` if present."""
        if child in self.children:
            self.children.remove(child)

    def clear_children(self) -> None:
        self.children.clear()

    def _update(self) -> Status:
        return Status.INVALID


class Sequence(Composite):
    """Tick children in order until one does not succeed."""

    name = "Sequence"

    def _on_initialize(self) -> None:
        self._index = 0

    def _update(self) -> Status:
        while self._index < len(self.children):
            state = self.children[self._index].tick()
            if state is not Status.SUCCESS:
                return state
            self._index += 1
        return Status.SUCCESS


class Condition(Behavior):
    """A test against the world; ``negation`` inverts its result."""

    name = "Condition"
    threshold = 50
    true_message = ""
    false_message = ""

    def __init__(self, negation: bool = False, dice: Optional[Callable[[], int]] = None) -> None:
        super().__init__()
        self.negation = negation
        self._dice = dice if dice is not None else _roll

    def _update(self) -> Status:
        if self._dice() > self.threshold:
            print(self.true_message)
            return Status.FAILURE if self.negation else Status.SUCCESS
        print(self.false_message)
        return Status.SUCCESS if self.negation else Status.FAILURE


class Action(Behavior):
    """A leaf that does something and succeeds."""

    name = "Action"
    message = ""

    def _update(self) -> Status:
        print(self.message)
        return Status.SUCCESS


class Filter(Sequence):
    """A sequence with conditions in front and actions behind."""

    name = "Filter"

    def add_condition(self, condition: Behavior) -> None:
        self.children.insert(0, condition)

    def add_action(self, action: Behavior) -> None:
        self.children.append(action)


class Selector(Composite):
    """Tick children in order until one succeeds."""

    name = "Selector"

    def _on_initialize(self) -> None:
        self._index = 0

    def _update(self) -> Status:
        while self._index < len(self.children):
            state = self.children[self._index].tick()
            if state is Status.SUCCESS:
                return state
            self._index += 1
        return Status.FAILURE


class Parallel(Composite):
    """Tick every unfinished child each update and combine their results."""

    name = "Parallel"

    def __init__(self, success: Policy, failure: Policy) -> None:
        super().__init__()
        self.success_policy = success
        self.failure_policy = failure

    def _reset_all(self) -> None:
        for child in self.children:
            child.reset()

    def _update(self) -> Status:
        successes = failures = 0
        for child in self.children:
            if child.is_terminated():
                continue
            child.tick()
            if child.is_success():
                successes += 1
                if self.success_policy is Policy.REQUIRE_ONE:
                    child.reset()
                    return Status.SUCCESS
            if child.is_failure():
                failures += 1
                if self.failure_policy is Policy.REQUIRE_ONE:
                    child.reset()
                    return Status.FAILURE

        total = len(self.children)
        if self.failure_policy is Policy.REQUIRE_ALL and failures == total:
            self._reset_all()
            return Status.FAILURE
        if self.success_policy is Policy.REQUIRE_ALL and successes == total:
            self._reset_all()
            return Status.SUCCESS
        return Status.RUNNING

    def _on_terminate(self) -> None:
        for child in self.children:
            if child.is_running():
                child.abort()


class Monitor(Parallel):
    """A parallel node with conditions in front and actions behind."""

    name = "Monitor"

    def add_condition(self, condition: Behavior) -> None:
        self.children.insert(0, condition)

    def add_action(self, action: Behavior) -> None:
        self.children.append(action)


class ActiveSelector(Selector):
    """A selector that re-evaluates from its first child on every update."""

    name = "ActiveSelector"

    def _on_initialize(self) -> None:
        self._index = len(self.children)

    def _update(self) -> Status:
        previous = self._index
        super()._on_initialize()
        state = super()._update()
        if previous < len(self.children) and previous != self._index:
            self.children[previous].abort()
        return state


class IsSeeEnemy(Condition):
    """Sees an enemy when the dice roll exceeds 50."""

    name = "Condition_IsSeeEnemy"
    threshold = 50
    true_message = "See enemy!"
    false_message = "Not see enemy"


class IsHealthLow(Condition):
    """Health is low when the dice roll exceeds 80."""

    name = "Condition_IsHealthLow"
    threshold = 80
    true_message = "Health is low!"
    false_message = "Health is not low"


class IsEnemyDead(Condition):
    """The enemy is dead when the dice roll exceeds 50."""

    name = "Condition_IsEnemyDead"
    threshold = 50
    true_message = "Enemy is Dead"
    false_message = "Enemy is not Dead"


class Attack(Action):
    name = "Action_Attack"
    message = "Action_Attack "


class Runaway(Action):
    name = "Action_Runaway"
    message = "Action_Runaway"


class Patrol(Action):
    name = "Action_Patrol"
    message = "Action_Patrol"