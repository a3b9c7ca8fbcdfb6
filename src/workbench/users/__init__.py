from workbench.users.models import User, UserBase

__all__ = [
    "User",
    "UserBase",
]
