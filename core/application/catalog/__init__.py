"""Built-in catalogs of agents and workflow templates."""

from .agents import BUILTIN_AGENTS, AgentCatalog, sample_input_for
from .workflow_templates import BUILTIN_TEMPLATES, TemplateCatalog

__all__ = [
    "AgentCatalog",
    "BUILTIN_AGENTS",
    "BUILTIN_TEMPLATES",
    "TemplateCatalog",
    "sample_input_for",
]
