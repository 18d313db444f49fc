"""Flow registry: ordered frame steps grouped per application."""

from __future__ import annotations

from collections.abc import Callable, Iterable

import structlog

from framekit.core.models.flow import Flow, FlowStep
from framekit.core.models.frame import Frame
from framekit.core.store.observable import Listener, ObservableStore

logger = structlog.get_logger(__name__)

StepInput = FlowStep | Frame


class FlowDefinitionError(ValueError):
    """Raised by define_flow for a malformed flow."""


def _to_step(step: StepInput) -> FlowStep:
    if isinstance(step, FlowStep):
        return step
    if isinstance(step, Frame):
        return FlowStep(frame=step)
    raise FlowDefinitionError(f"Flow step must be a FlowStep or Frame, got {type(step).__name__}")


class FlowRegistry:
    """Flows keyed by id. Registering an existing id replaces it wholesale."""

    def __init__(self) -> None:
        self._flows: ObservableStore[str, Flow] = ObservableStore(name="flows")

    def register_flow(self, flow: Flow) -> None:
        self._flows.register(flow.id, flow)
        logger.debug("Flow registered", flow_id=flow.id, app_id=flow.app_id, step_count=flow.step_count)

    def unregister_flow(self, flow_id: str) -> None:
        self._flows.unregister(flow_id)

    def define_flow(
        self,
        id: str,
        name: str,
        app_id: str,
        steps: Iterable[StepInput],
        description: str | None = None,
    ) -> Flow:
        """
        Build and register a flow.

        Steps keep the exact frame objects they are given, so a frame that
        is also in the frame registry is the same object in both places.

        Args:
            id: Unique flow id
            name: Display name
            app_id: Application the flow walks through
            steps: FlowStep objects, or bare frames for steps without tasks
            description: Optional description

        Returns:
            The registered flow

        Raises:
            FlowDefinitionError: If id is empty or a step has the wrong type
        """
        if not id:
            raise FlowDefinitionError("flow id must not be empty")
        flow = Flow(
            id=id,
            name=name,
            app_id=app_id,
            steps=[_to_step(step) for step in steps],
            description=description,
        )
        self.register_flow(flow)
        return flow

    def get_all_flows(self) -> list[Flow]:
        return self._flows.get_all()

    def get_app_flows(self, app_id: str) -> list[Flow]:
        return [flow for flow in self._flows if flow.app_id == app_id]

    def get_flow(self, flow_id: str) -> Flow | None:
        return self._flows.get(flow_id)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._flows.subscribe(listener)

    def clear(self) -> None:
        self._flows.clear()

    def clear_listeners(self) -> None:
        self._flows.clear_listeners()
