"""Material use cases."""

from .create_material import CreateMaterialRequest, CreateMaterialUseCase
from .delete_material import DeleteMaterialRequest, DeleteMaterialUseCase
from .get_material import GetMaterialRequest, GetMaterialResponse, GetMaterialUseCase
from .get_material_stats import GetMaterialStatsResponse, GetMaterialStatsUseCase
from .list_materials import (
    ListMaterialsRequest,
    ListMaterialsResponse,
    ListMaterialsUseCase,
    MaterialListItem,
)
from .update_material import UpdateMaterialRequest, UpdateMaterialUseCase

__all__ = [
    "CreateMaterialRequest",
    "CreateMaterialUseCase",
    "DeleteMaterialRequest",
    "DeleteMaterialUseCase",
    "GetMaterialRequest",
    "GetMaterialResponse",
    "GetMaterialUseCase",
    "GetMaterialStatsResponse",
    "GetMaterialStatsUseCase",
    "ListMaterialsRequest",
    "ListMaterialsResponse",
    "ListMaterialsUseCase",
    "MaterialListItem",
    "UpdateMaterialRequest",
    "UpdateMaterialUseCase",
]
