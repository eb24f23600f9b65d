"""Application layer interfaces."""
from abc import ABC, abstractmethod
from typing import Generic, List, Mapping, Optional, TypeVar

from core.domain.entities import AgentDefinition, Execution, IntegrationResult


class ITextGenerator(ABC):
    """
    Interface for the text-generation collaborator.

    Implementations report ``available = False`` when no credential is
    configured; callers then fall back to mock output instead of calling
    ``generate``.
    """

    @property
    @abstractmethod
    def available(self) -> bool:
        """Whether a credential is configured."""

    @abstractmethod
    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: Optional[float] = None,
    ) -> str:
        """
        Generate a completion.

        Args:
            system_prompt: Instruction text of the agent
            user_prompt: Task prompt
            max_tokens: Token budget for the completion
            temperature: Optional sampling temperature

        Returns:
            Generated text

        Raises:
            TextGenerationError: If the API call fails
        """


class IIntegrationAdapter(ABC):
    """
    Interface for one external integration.

    Adapters may raise; the registry turns exceptions into failure results.
    """

    integration_id: str

    @abstractmethod
    async def execute(
        self, payload: Mapping[str, object], credentials: Mapping[str, str]
    ) -> IntegrationResult:
        """
        Perform the external call for an already-validated credential set.

        Args:
            payload: Step input; the deliverable text lives at ``result.deliverable``
            credentials: Caller-supplied credential map

        Returns:
            Successful IntegrationResult
        """


class IExecutionRecorder(ABC):
    """Interface for persisting a copy of finished agent runs."""

    @abstractmethod
    async def record_agent_execution(
        self, execution: Execution, agent: AgentDefinition
    ) -> None:
        """
        Persist a terminal agent run with its steps.

        Args:
            execution: Finished execution
            agent: Agent definition the run used
        """


RecordT = TypeVar("RecordT")


class IExecutionStore(ABC, Generic[RecordT]):
    """Keyed store of run records (agent or workflow)."""

    @abstractmethod
    def put(self, record: RecordT) -> None:
        """Insert or replace a record under its id."""

    @abstractmethod
    def get(self, record_id: str) -> Optional[RecordT]:
        """Return the record or None."""

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> List[RecordT]:
        """Return all records started by ``owner_id``."""

    @abstractmethod
    def values(self) -> List[RecordT]:
        """Return every retained record."""


__all__ = ["IExecutionRecorder", "IExecutionStore", "IIntegrationAdapter", "ITextGenerator"]
