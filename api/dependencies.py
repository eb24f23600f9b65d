"""
FastAPI Dependencies.

Provides dependency injection for catalogs, stores and run engines.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional
from dotenv import load_dotenv

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.application.catalog import AgentCatalog, TemplateCatalog
from core.application.interfaces import IExecutionRecorder, ITextGenerator
from core.infrastructure.integrations import IntegrationRegistry, create_default_registry
from core.infrastructure.llm import OpenAIChatClient
from core.infrastructure.stores import InMemoryExecutionStore
from core.settings import AppSettings, get_app_settings
from orchestration import (
    AgentRunCoordinator,
    ExecutionRecordingSubscriber,
    InMemoryEventBus,
    RunSupervisor,
    StepExecutor,
    WorkflowTemplateRunner,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_settings: Optional[AppSettings] = None
_event_bus = None
_supervisor = None
_agent_catalog = None
_template_catalog = None
_text_generator = None
_integration_registry = None
_agent_store = None
_workflow_store = None
_database_engine = None
_execution_recorder = None
_agent_coordinator = None
_workflow_runner = None


# =============================================================================
# DEPENDENCIES
# =============================================================================

def use_settings(settings: AppSettings) -> None:
    """Replace the settings every dependency is built from (drops existing singletons)."""
    global _settings
    reset_dependencies()
    _settings = settings


def get_settings() -> AppSettings:
    return _settings or get_app_settings()


def get_event_bus() -> InMemoryEventBus:
    global _event_bus
    if _event_bus is None:
        _event_bus = InMemoryEventBus()
    return _event_bus


def get_supervisor() -> RunSupervisor:
    global _supervisor
    if _supervisor is None:
        _supervisor = RunSupervisor()
    return _supervisor


def get_agent_catalog() -> AgentCatalog:
    global _agent_catalog
    if _agent_catalog is None:
        _agent_catalog = AgentCatalog()
        logger.info(f"Loaded {len(_agent_catalog.all())} agents")
    return _agent_catalog


def get_template_catalog() -> TemplateCatalog:
    global _template_catalog
    if _template_catalog is None:
        _template_catalog = TemplateCatalog()
        logger.info(f"Loaded {len(_template_catalog.all())} workflow templates")
    return _template_catalog


def get_text_generator() -> ITextGenerator:
    global _text_generator
    if _text_generator is None:
        _text_generator = OpenAIChatClient(get_settings().llm)
    return _text_generator


def set_text_generator(generator: ITextGenerator) -> None:
    """Swap the text generator (the coordinator is rebuilt on next use)."""
    global _text_generator, _agent_coordinator
    _text_generator = generator
    _agent_coordinator = None


def get_integration_registry() -> IntegrationRegistry:
    global _integration_registry
    if _integration_registry is None:
        _integration_registry = create_default_registry(get_settings().engine.integration_delay)
    return _integration_registry


def get_agent_store() -> InMemoryExecutionStore:
    global _agent_store
    if _agent_store is None:
        store = get_settings().store
        _agent_store = InMemoryExecutionStore(store.ttl_seconds, store.max_entries)
    return _agent_store


def get_workflow_store() -> InMemoryExecutionStore:
    global _workflow_store
    if _workflow_store is None:
        store = get_settings().store
        _workflow_store = InMemoryExecutionStore(store.ttl_seconds, store.max_entries)
    return _workflow_store


def get_database_engine() -> Optional["AsyncEngine"]:
    """Engine for the persistence copy, or None when DATABASE_URL is unset."""
    global _database_engine
    settings = get_settings().database
    if _database_engine is None and settings.enabled:
        from core.infrastructure.database import create_engine
        _database_engine = create_engine(settings)
    return _database_engine


def get_execution_recorder() -> Optional[IExecutionRecorder]:
    global _execution_recorder
    if _execution_recorder is None:
        engine = get_database_engine()
        if engine is None:
            return None
        from core.infrastructure.database import SqlAlchemyExecutionRecorder, create_session_factory
        _execution_recorder = SqlAlchemyExecutionRecorder(create_session_factory(engine))
        logger.info("Created SqlAlchemyExecutionRecorder instance")
    return _execution_recorder


def get_agent_coordinator() -> AgentRunCoordinator:
    global _agent_coordinator
    if _agent_coordinator is None:
        executor = StepExecutor(
            text_generator=get_text_generator(),
            registry=get_integration_registry(),
        )
        _agent_coordinator = AgentRunCoordinator(
            catalog=get_agent_catalog(),
            executor=executor,
            store=get_agent_store(),
            supervisor=get_supervisor(),
            event_bus=get_event_bus(),
        )
        logger.info("Created AgentRunCoordinator instance")
        recorder = get_execution_recorder()
        if recorder is not None:
            ExecutionRecordingSubscriber(
                recorder, get_agent_store(), get_agent_catalog()
            ).register(get_event_bus())
    return _agent_coordinator


def get_workflow_runner() -> WorkflowTemplateRunner:
    global _workflow_runner
    if _workflow_runner is None:
        _workflow_runner = WorkflowTemplateRunner(
            catalog=get_template_catalog(),
            store=get_workflow_store(),
            supervisor=get_supervisor(),
            event_bus=get_event_bus(),
            engine_settings=get_settings().engine,
        )
        logger.info("Created WorkflowTemplateRunner instance")
    return _workflow_runner


# =============================================================================
# RESET (for testing)
# =============================================================================

def reset_dependencies():
    global _settings, _event_bus, _supervisor, _agent_catalog, _template_catalog
    global _text_generator, _integration_registry, _agent_store, _workflow_store
    global _database_engine, _execution_recorder, _agent_coordinator, _workflow_runner

    _settings = None
    _event_bus = None
    _supervisor = None
    _agent_catalog = None
    _template_catalog = None
    _text_generator = None
    _integration_registry = None
    _agent_store = None
    _workflow_store = None
    _database_engine = None
    _execution_recorder = None
    _agent_coordinator = None
    _workflow_runner = None

    logger.info("Dependencies reset")
