"""Event subscribers - side effects driven by run lifecycle events."""

from core.application.catalog import AgentCatalog
from core.application.interfaces import IExecutionRecorder, IExecutionStore
from core.domain.entities import Execution
from core.infrastructure.logging import get_logger

from .bus import EventBusProtocol
from .coordinator import RUN_KIND as AGENT_RUN_KIND
from .events import RUN_COMPLETED, RUN_FAILED, Event


class ExecutionRecordingSubscriber:
    """Writes terminal agent runs to the execution recorder.

    Listens to ``run.completed`` and ``run.failed``. Workflow runs are
    ignored. Recorder failures stay inside the bus, so they never change
    the run's status.
    """

    def __init__(
        self,
        recorder: IExecutionRecorder,
        store: IExecutionStore[Execution],
        catalog: AgentCatalog,
    ) -> None:
        self._recorder = recorder
        self._store = store
        self._catalog = catalog
        self._logger = get_logger("orchestration.subscribers")

    def register(self, bus: EventBusProtocol) -> None:
        """Subscribe to the terminal run events.

        Args:
            bus: Event bus the coordinator publishes on
        """
        bus.subscribe(RUN_COMPLETED, self.handle)
        bus.subscribe(RUN_FAILED, self.handle)
        self._logger.info("Execution recording subscriber registered")

    async def handle(self, event: Event) -> None:
        if event.metadata.run_kind != AGENT_RUN_KIND:
            return

        execution = self._store.get(event.metadata.execution_id)
        agent = self._catalog.get(event.metadata.subject_id)
        if execution is None or agent is None:
            self._logger.warning(
                f"Skipping record of {event.metadata.execution_id}: run or agent no longer known"
            )
            return

        await self._recorder.record_agent_execution(execution, agent)
