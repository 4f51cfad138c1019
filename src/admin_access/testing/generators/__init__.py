"""Testing generators – hypothesis strategies for permissions and roles."""
from admin_access.testing.generators.strategies import (
    permission_id_strategy,
    role_id_strategy,
    role_strategy,
)

__all__ = ["permission_id_strategy", "role_id_strategy", "role_strategy"]
