# Route -> required capability table
import enum
from typing import Mapping


class Capability(str, enum.Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    # Credential must belong to the user the request names (path or body), or carry the admin role
    OWNER = "owner"
    ADMIN = "admin"


DEFAULT_ROUTE_POLICY: Mapping[str, Capability] = {
    "health": Capability.PUBLIC,
    "login": Capability.PUBLIC,
    "add_shift": Capability.OWNER,
    "list_shifts": Capability.OWNER,
    "export": Capability.ADMIN,
}


def required_capability(route: str, overrides: Mapping[str, Capability]) -> Capability:
    """Resolve the capability a route needs, letting deployment overrides win."""
    if route in overrides:
        return Capability(overrides[route])
    return DEFAULT_ROUTE_POLICY[route]
