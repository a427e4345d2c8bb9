from __future__ import annotations

from dishka import Provider, Scope, from_context, provide
from fastapi import Request

from renthive_service_libs.auth import AuthGate, Identity


class AuthProvider(Provider):
    """Provider for authentication dependencies at REQUEST scope."""

    # Get FastAPI Request from context (provided by FastAPI integration)
    request = from_context(provides=Request, scope=Scope.REQUEST)

    @provide(scope=Scope.REQUEST)
    async def provide_identity(self, request: Request, gate: AuthGate) -> Identity:
        """
        Resolve the caller's Identity through the auth gate.

        Handlers that declare ``FromDishka[Identity]`` are protected: the gate
        rejects the request with 401/500 before the handler body runs.
        """
        return await gate.authenticate(request)
