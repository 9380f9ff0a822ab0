"""Review state use cases."""

from .create_state import CreateStateRequest, CreateStateUseCase
from .delete_state import DeleteStateRequest, DeleteStateUseCase
from .list_states import ListStatesResponse, ListStatesUseCase
from .set_default_state import SetDefaultStateRequest, SetDefaultStateUseCase
from .update_state import UpdateStateRequest, UpdateStateUseCase

__all__ = [
    "CreateStateRequest",
    "CreateStateUseCase",
    "DeleteStateRequest",
    "DeleteStateUseCase",
    "ListStatesResponse",
    "ListStatesUseCase",
    "SetDefaultStateRequest",
    "SetDefaultStateUseCase",
    "UpdateStateRequest",
    "UpdateStateUseCase",
]
