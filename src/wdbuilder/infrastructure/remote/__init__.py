from .executors import create_executor
from .session_factory import create_session

__all__ = [
    "create_executor",
    "create_session",
]
