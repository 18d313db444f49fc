"""Flow data models: ordered frame steps with trackable progress."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from framekit.core.models.frame import Frame


@dataclass(eq=False)
class FlowStep:
    """One step of a flow. Holds the frame by reference, never a copy."""

    frame: Frame
    tasks: list[str] = field(default_factory=list)

    @property
    def task_count(self) -> int:
        return len(self.tasks)


@dataclass
class Flow:
    """An ordered sequence of frames describing a guided scenario."""

    id: str
    name: str
    app_id: str
    steps: list[FlowStep] = field(default_factory=list)
    description: str | None = None

    @property
    def step_count(self) -> int:
        return len(self.steps)

    @property
    def frames(self) -> list[Frame]:
        return [step.frame for step in self.steps]


def completion_percent(completed: int, total: int) -> int:
    """
    Percentage of completed steps, rounded half up.

    Args:
        completed: Number of completed steps
        total: Total number of steps

    Returns:
        Integer percent, 0 when total is 0
    """
    if total <= 0:
        return 0
    # Integer form of floor(completed * 100 / total + 0.5)
    return (200 * completed + total) // (2 * total)


def _parse_index(value: Any) -> int:
    # bool is an int subclass but never a valid index
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Invalid index: {value!r}")
    return value


def _parse_step_key(key: Any) -> int:
    # int() would also take "+1", " 1 " and "1_0"
    try:
        step_index = int(key)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid step key: {key!r}") from e
    if str(step_index) != key:
        raise ValueError(f"Invalid step key: {key!r}")
    return step_index


@dataclass
class FlowProgress:
    """Completion state of a single flow.

    Steps and tasks are keyed by position. Indices are not checked against
    the live flow, so stale ones from a shrunk flow stay stored but inert.
    """

    flow_id: str
    completed_steps: set[int] = field(default_factory=set)
    completed_tasks: dict[int, set[int]] = field(default_factory=dict)

    @classmethod
    def empty(cls, flow_id: str) -> FlowProgress:
        return cls(flow_id=flow_id)

    @property
    def is_empty(self) -> bool:
        return not self.completed_steps and not any(self.completed_tasks.values())

    def copy(self) -> FlowProgress:
        return FlowProgress(
            flow_id=self.flow_id,
            completed_steps=set(self.completed_steps),
            completed_tasks={k: set(v) for k, v in self.completed_tasks.items()},
        )

    def is_step_complete(self, step_index: int) -> bool:
        return step_index in self.completed_steps

    def is_task_complete(self, step_index: int, task_index: int) -> bool:
        return task_index in self.completed_tasks.get(step_index, set())

    def percent_for(self, flow: Flow) -> int:
        """Completion percent against the flow's current steps only."""
        total = flow.step_count
        done = sum(1 for i in self.completed_steps if 0 <= i < total)
        return completion_percent(done, total)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the persisted record layout."""
        return {
            "flowId": self.flow_id,
            "completedSteps": sorted(self.completed_steps),
            "completedTasks": {
                str(step): sorted(tasks)
                for step, tasks in sorted(self.completed_tasks.items())
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, flow_id: str, data: Any) -> FlowProgress:
        """
        Build progress from a persisted record.

        Args:
            flow_id: Flow the record belongs to
            data: Decoded JSON value

        Returns:
            Parsed progress

        Raises:
            ValueError: If the record does not have the expected shape
        """
        if not isinstance(data, dict):
            raise ValueError("Progress record must be an object")

        steps = data.get("completedSteps", [])
        tasks = data.get("completedTasks", {})
        if not isinstance(steps, list) or not isinstance(tasks, dict):
            raise ValueError("Malformed progress record")

        completed_tasks: dict[int, set[int]] = {}
        for key, indices in tasks.items():
            step_index = _parse_step_key(key)
            if not isinstance(indices, list):
                raise ValueError(f"Task list for step {key!r} must be a list")
            completed_tasks[step_index] = {_parse_index(i) for i in indices}

        return cls(
            flow_id=flow_id,
            completed_steps={_parse_index(i) for i in steps},
            completed_tasks=completed_tasks,
        )

    @classmethod
    def from_json(cls, flow_id: str, raw: str) -> FlowProgress:
        """Parse a serialized record. Raises ValueError on bad input."""
        return cls.from_dict(flow_id, json.loads(raw))
