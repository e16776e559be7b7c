from .api import DictionaryStore, make_store

__all__ = ["DictionaryStore", "make_store"]
