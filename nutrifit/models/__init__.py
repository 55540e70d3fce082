from nutrifit.models.user import User, GenderEnum, ActivityLevelEnum
from nutrifit.models.storage_item import StorageItem

__all__ = [
    "User", "GenderEnum", "ActivityLevelEnum",
    "StorageItem",
]
