from pydantic import EmailStr
from sqlmodel import Field, SQLModel

from workbench.core.base_models import BaseTable


class UserBase(SQLModel):
    email: EmailStr = Field(unique=True, index=True, max_length=255)
    is_active: bool = True
    full_name: str | None = Field(default=None, max_length=255)


class User(UserBase, BaseTable, table=True):
    """An actor who translates or reviews copy.

    Roles and permissions live with the caller; the core only needs the
    identity to stamp translations and change records.
    """
