"""Database infrastructure: ORM models, engine setup and the execution recorder."""

from .config import close_database, create_engine, create_session_factory, init_database
from .execution_recorder import SqlAlchemyExecutionRecorder
from .models import AgentExecutionModel, Base, ExecutionStepModel

__all__ = [
    "AgentExecutionModel",
    "Base",
    "ExecutionStepModel",
    "SqlAlchemyExecutionRecorder",
    "close_database",
    "create_engine",
    "create_session_factory",
    "init_database",
]
