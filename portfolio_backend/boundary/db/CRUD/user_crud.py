"""
User CRUD operations.

Portfolios only read users: ownership checks resolve the acting user by
primary key through BaseCRUD.get_by_id.

Dependencies: portfolio_backend.boundary.db.models
System role: Owner lookups for permission checks
"""

from portfolio_backend.boundary.db.models.user_model import UserModel
from portfolio_backend.boundary.db.CRUD.base_crud import BaseCRUD


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        super().__init__(UserModel)


user_crud = UserCRUD()
