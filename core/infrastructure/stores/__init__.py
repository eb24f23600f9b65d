from .in_memory_store import InMemoryExecutionStore

__all__ = ["InMemoryExecutionStore"]
