# Dependency injection (app state, route policy, JWT verification)
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from typing import Any, Awaitable, Callable, Optional

from shifttrack.core.config import Settings
from shifttrack.core.errors import AuthorizationError
from shifttrack.core.policy import Capability, required_capability
from shifttrack.core.security import authorize
from shifttrack.db.store import ShiftStore
from shifttrack.models.schemas import Identity
from shifttrack.models.shift import ShiftSchema, get_shift_schema
from shifttrack.models.user import UserRole

# Missing/non-bearer headers yield None so the policy decides between 401 and public access
security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> ShiftStore:
    return request.app.state.store


def get_active_schema(request: Request) -> ShiftSchema:
    return get_shift_schema(request.app.state.settings.SHIFT_VARIANT)


async def _target_user_id(request: Request) -> Optional[Any]:
    """User a request acts on: the ``user_id`` path parameter, else the JSON body's ``user_id``."""
    if "user_id" in request.path_params:
        return request.path_params["user_id"]

    if not await request.body():
        return None
    try:
        body = await request.json()
    except ValueError:
        return None
    return body.get("user_id") if isinstance(body, dict) else None


def require(route: str) -> Callable[..., Awaitable[Optional[Identity]]]:
    """
    Build the access guard for ``route`` from the policy table.

    - public: returns None, any credential is ignored
    - authenticated: any valid credential
    - owner: credential whose user_id matches the path or body user_id, or an admin
    - admin: credential with the admin role

    Missing credentials raise AuthenticationError (401); invalid credentials
    or insufficient privilege raise AuthorizationError (403).
    """

    async def guard(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    ) -> Optional[Identity]:
        settings: Settings = request.app.state.settings
        capability = required_capability(route, settings.ROUTE_POLICY)

        if capability == Capability.PUBLIC:
            return None

        identity = authorize(credentials.credentials if credentials else None, settings)

        if capability == Capability.ADMIN and identity.role != UserRole.ADMIN:
            raise AuthorizationError("Zugriff verweigert. Administratorrechte erforderlich.")

        if capability == Capability.OWNER and identity.role != UserRole.ADMIN:
            target = await _target_user_id(request)
            # A body without user_id is rejected by field validation, nothing to own
            if target is not None and str(identity.user_id) != str(target):
                raise AuthorizationError("Zugriff verweigert.")

        return identity

    return guard
