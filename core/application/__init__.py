"""Application layer - interfaces and built-in catalogs."""

from .catalog import AgentCatalog, TemplateCatalog, sample_input_for
from .interfaces import (
    IExecutionRecorder,
    IExecutionStore,
    IIntegrationAdapter,
    ITextGenerator,
)

__all__ = [
    "AgentCatalog",
    "IExecutionRecorder",
    "IExecutionStore",
    "IIntegrationAdapter",
    "ITextGenerator",
    "TemplateCatalog",
    "sample_input_for",
]
