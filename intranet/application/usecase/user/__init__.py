"""User use cases."""

from .bootstrap_admin import BootstrapAdminUseCase
from .create_user import CreateUserUseCase
from .get_user import GetUserUseCase
from .list_users import ListUsersUseCase
from .update_user_profile import UpdateUserProfileUseCase
from .update_user_role import UpdateUserRoleUseCase

__all__ = [
    "BootstrapAdminUseCase",
    "CreateUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "UpdateUserProfileUseCase",
    "UpdateUserRoleUseCase",
]
