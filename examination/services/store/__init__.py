from .entity_store import EntityStore, entity_store

__all__ = ["EntityStore", "entity_store"]
