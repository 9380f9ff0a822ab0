"""Tag use cases."""

from .create_tag import CreateTagRequest, CreateTagUseCase
from .create_tag_group import CreateTagGroupRequest, CreateTagGroupUseCase
from .delete_tag import DeleteTagRequest, DeleteTagUseCase
from .delete_tag_group import DeleteTagGroupRequest, DeleteTagGroupUseCase
from .list_tag_groups import ListTagGroupsResponse, ListTagGroupsUseCase
from .update_tag import UpdateTagRequest, UpdateTagUseCase
from .update_tag_group import UpdateTagGroupRequest, UpdateTagGroupUseCase

__all__ = [
    "CreateTagGroupRequest",
    "CreateTagGroupUseCase",
    "CreateTagRequest",
    "CreateTagUseCase",
    "DeleteTagGroupRequest",
    "DeleteTagGroupUseCase",
    "DeleteTagRequest",
    "DeleteTagUseCase",
    "ListTagGroupsResponse",
    "ListTagGroupsUseCase",
    "UpdateTagGroupRequest",
    "UpdateTagGroupUseCase",
    "UpdateTagRequest",
    "UpdateTagUseCase",
]
