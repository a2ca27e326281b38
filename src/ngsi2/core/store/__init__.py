from ngsi2.core.store.base import ContextStore
from ngsi2.core.store.loader import load_context_store

__all__ = ["ContextStore", "load_context_store"]
