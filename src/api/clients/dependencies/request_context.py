"""Request context FastAPI dependencies.

Resolves the tenant and the acting user of an HTTP request.

Tenant, first match wins:
    1. ``tenant_id`` carried by the request itself (body or query)
    2. ``X-Tenant-ID`` header
    3. the configured default tenant, in development only
    Otherwise the request is rejected with 401.

Actor, first match wins:
    1. ``X-User-ID`` header
    2. ``X-User-Email`` header
    3. claims of the gateway's bearer token (``sub``/``user_id``, then
       ``email``/``preferred_username``, then ``name``)
    4. the configured default actor, in development only

The bearer token is read without signature verification: the API gateway
in front of this service has already verified it.

An actor supplied explicitly in a request body takes precedence over all
of these and is applied by the application service.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, HTTPException, Query, Request, status
from jose import JWTError, jwt
from ulid import ULID

from infrastructure.settings import Settings, get_settings
from shared_kernel.middleware import (
    IUserContext,
    RequestContext,
    TenantContext,
    TenantSource,
)
from shared_kernel.middleware.observability import (
    DefaultRequestContextProbe,
    RequestContextProbe,
)

TENANT_HEADER = "x-tenant-id"
USER_ID_HEADER = "x-user-id"
USER_EMAIL_HEADER = "x-user-email"
REQUEST_ID_HEADER = "x-request-id"

_IDENTITY_CLAIMS = (("sub", "user_id"), ("email", "preferred_username"), ("name",))


def _non_blank(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


class HeaderUserContext(IUserContext[Request]):
    """Resolves identity and tenant from HTTP headers and gateway claims."""

    def __init__(
        self,
        settings: Settings,
        probe: RequestContextProbe | None = None,
    ) -> None:
        self._settings = settings
        self._probe = probe or DefaultRequestContextProbe()

    def resolve_actor_identity(self, request: Request) -> str | None:
        for header in (USER_ID_HEADER, USER_EMAIL_HEADER):
            actor = _non_blank(request.headers.get(header))
            if actor is not None:
                self._probe.actor_resolved(actor, source=header)
                return actor

        actor = self._actor_from_claims(request)
        if actor is not None:
            self._probe.actor_resolved(actor, source="gateway_claims")
            return actor

        if self._settings.is_development:
            self._probe.actor_resolved(self._settings.default_actor, source="default")
            return self._settings.default_actor
        return None

    def resolve_tenant_id(self, request: Request) -> str | None:
        tenant = self.resolve_tenant(request)
        return tenant.tenant_id if tenant is not None else None

    def resolve_tenant(
        self, request: Request, requested: str | None = None
    ) -> TenantContext | None:
        """Resolve the tenant, preferring a value carried by the request."""
        tenant_id = _non_blank(requested)
        if tenant_id is not None:
            return TenantContext(tenant_id=tenant_id, source=TenantSource.REQUEST)

        tenant_id = _non_blank(request.headers.get(TENANT_HEADER))
        if tenant_id is not None:
            return TenantContext(tenant_id=tenant_id, source=TenantSource.HEADER)

        if self._settings.is_development:
            return TenantContext(
                tenant_id=self._settings.default_tenant_id,
                source=TenantSource.DEFAULT,
            )
        return None

    def _actor_from_claims(self, request: Request) -> str | None:
        authorization = request.headers.get("authorization", "")
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None

        try:
            claims: dict[str, Any] = jwt.get_unverified_claims(token.strip())
        except JWTError as e:
            self._probe.gateway_claims_unreadable(e)
            return None

        for names in _IDENTITY_CLAIMS:
            for name in names:
                value = claims.get(name)
                if isinstance(value, str) and value.strip():
                    return value.strip()
        return None


def get_request_context_probe() -> RequestContextProbe:
    """Get RequestContextProbe instance."""
    return DefaultRequestContextProbe()


def get_user_context(
    settings: Annotated[Settings, Depends(get_settings)],
    probe: Annotated[RequestContextProbe, Depends(get_request_context_probe)],
) -> HeaderUserContext:
    """Get the HTTP user context for the current settings."""
    return HeaderUserContext(settings=settings, probe=probe)


def get_request_actor(
    request: Request,
    user_context: Annotated[HeaderUserContext, Depends(get_user_context)],
) -> str | None:
    """Actor identity carried by the request, if any (FastAPI dependency)."""
    return user_context.resolve_actor_identity(request)


class RequestContextResolver:
    """Builds the request context once the request's own tenant is known.

    Routes with a body pass the body's ``tenant_id``; routes without one
    use ``get_request_context`` and the query parameter instead.
    """

    def __init__(
        self,
        request: Request,
        user_context: HeaderUserContext,
        probe: RequestContextProbe,
        actor: str | None,
    ) -> None:
        self._request = request
        self._user_context = user_context
        self._probe = probe
        self._actor = actor

    def resolve(self, requested_tenant_id: str | None = None) -> RequestContext:
        """Resolve tenant, actor and request id.

        Args:
            requested_tenant_id: ``tenant_id`` carried by the body or query

        Raises:
            HTTPException 401: If no tenant can be resolved
        """
        tenant = self._user_context.resolve_tenant(self._request, requested_tenant_id)
        if tenant is None:
            self._probe.tenant_missing()
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Tenant ID is required",
            )

        self._probe.tenant_resolved(tenant.tenant_id, source=tenant.source.value)
        request_id = _non_blank(self._request.headers.get(REQUEST_ID_HEADER))
        return RequestContext(
            tenant=tenant,
            actor=self._actor,
            request_id=request_id or str(ULID()),
        )


def get_request_context_resolver(
    request: Request,
    user_context: Annotated[HeaderUserContext, Depends(get_user_context)],
    probe: Annotated[RequestContextProbe, Depends(get_request_context_probe)],
    actor: Annotated[str | None, Depends(get_request_actor)],
) -> RequestContextResolver:
    """Get the request context resolver (FastAPI dependency)."""
    return RequestContextResolver(request, user_context, probe, actor)


def get_request_context(
    resolver: Annotated[RequestContextResolver, Depends(get_request_context_resolver)],
    tenant_id: Annotated[str | None, Query()] = None,
) -> RequestContext:
    """Request context for routes without a body (FastAPI dependency).

    The tenant may be passed as the ``tenant_id`` query parameter.
    """
    return resolver.resolve(tenant_id)
