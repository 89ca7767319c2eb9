# Persistence - JSON state file

from .json_state import AlertRecord, JsonStateStore, PersistedState

__all__ = [
    "AlertRecord",
    "JsonStateStore",
    "PersistedState",
]
