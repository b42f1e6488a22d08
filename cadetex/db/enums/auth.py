"""Auth-related enums."""

from enum import Enum


class Role(str, Enum):
    """
    User roles.

    - SUPERADMIN: Platform operator, unrestricted across organizations
    - ORGADMIN: Administers one organization
    - COURIER: Works the tasks of one organization
    """

    SUPERADMIN = "SUPERADMIN"
    ORGADMIN = "ORGADMIN"
    COURIER = "COURIER"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Check if value is a valid role."""
        return value in cls._value2member_map_
