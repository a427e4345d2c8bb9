"""
Proxied API routes for the RentHive Gateway.

Each entry in PROXY_ROUTES describes one inbound route; all of them are
executed by the injected ProxyDispatcher.
"""

from __future__ import annotations

from urllib.parse import quote, urlencode

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request
from fastapi.responses import Response

from services.renthive_gateway.models.requests import (
    AgreementCreate,
    AgreementTaskUpdate,
    CalendarEvents,
    ContractSummariesQuery,
    FeatureQuery,
    ImageDelete,
    InvitationAccept,
    PropertyCreate,
    PropertyQuery,
    PropertyUserQuery,
    TimelineAllQuery,
    TimelineEventCreate,
    UsageIncrement,
    UserLookupQuery,
)
from services.renthive_gateway.proxy import (
    AUTH_REQUIRED_MESSAGE,
    BackendBase,
    CredentialMode,
    ProxyCall,
    ProxyDispatcher,
    ProxyRoute,
)

router = APIRouter(route_class=DishkaRoute)

PROPERTY_ID_REQUIRED = "Property ID is required"


def _query(call: ProxyCall, name: str) -> str:
    return quote(str(getattr(call.query, name)), safe="")


def _user_lookup_target(call: ProxyCall) -> str:
    if call.query.email:
        return f"/users/lookup?email={_query(call, 'email')}"
    return f"/users/{_query(call, 'id')}"


def _property_users_target(call: ProxyCall) -> str:
    return f"/property-users/properties/{_query(call, 'propertyId')}/users"


def _property_user_target(call: ProxyCall) -> str:
    return (
        f"/property-users/properties/{_query(call, 'propertyId')}"
        f"/users/{_query(call, 'userId')}"
    )


def _timeline_all_target(call: ProxyCall) -> str:
    if call.query.days:
        return f"/timeline/all?days={_query(call, 'days')}"
    return "/timeline/all"


def _contract_summaries_target(call: ProxyCall) -> str:
    return f"/contracts/summaries?{urlencode(call.query.model_dump(exclude_none=True))}"


def _task_update_payload(call: ProxyCall) -> dict:
    return {key: call.body[key] for key in ("taskIndex", "action", "userId") if key in call.body}


def _usage_increment_payload(call: ProxyCall) -> dict:
    # Admin callers may increment on behalf of another user
    return {
        "userId": call.body.get("userId") or call.identity.id,
        "feature": call.body["feature"],
    }


def _image_delete_payload(call: ProxyCall) -> dict:
    return {"imagePath": call.body["imagePath"]}


PROXY_ROUTES: tuple[ProxyRoute, ...] = (
    # Agreements
    ProxyRoute(
        name="agreements_list",
        method="GET",
        path="/agreements",
        target="/agreements",
        failure_message="Failed to fetch agreements",
    ),
    ProxyRoute(
        name="agreements_create",
        method="POST",
        path="/agreements",
        target="/agreements",
        failure_message="Failed to create agreement",
        body_model=AgreementCreate,
        body_error="Missing required fields: title, propertyId, and checkItems",
    ),
    ProxyRoute(
        name="agreements_get",
        method="GET",
        path="/agreements/{id}",
        target="/agreements/{id}",
        failure_message="Failed to fetch agreement",
    ),
    ProxyRoute(
        name="agreements_update",
        method="PUT",
        path="/agreements/{id}",
        target="/agreements/{id}",
        failure_message="Failed to update agreement",
    ),
    ProxyRoute(
        name="agreements_delete",
        method="DELETE",
        path="/agreements/{id}",
        target="/agreements/{id}",
        failure_message="Failed to delete agreement",
    ),
    ProxyRoute(
        name="agreement_tasks_update",
        method="PUT",
        path="/agreements/{id}/tasks",
        target="/agreements/{id}/tasks",
        failure_message="Failed to update task",
        body_model=AgreementTaskUpdate,
        body_error="Missing required fields: taskIndex and action",
        build_payload=_task_update_payload,
    ),
    # Calendar
    ProxyRoute(
        name="calendar_ics_multiple",
        method="POST",
        path="/calendar/ics/multiple",
        target="/calendar/ics/multiple",
        failure_message="Failed to create calendar events",
        body_model=CalendarEvents,
        body_error="Missing or invalid events array",
    ),
    # Contracts
    ProxyRoute(
        name="contract_summaries_list",
        method="GET",
        path="/contracts/summaries",
        target="/contracts/summaries",
        failure_message="Failed to fetch contract summaries",
        credential=CredentialMode.OPTIONAL,
        query_model=ContractSummariesQuery,
        forward_query=False,
        resolve_target=_contract_summaries_target,
    ),
    ProxyRoute(
        name="contract_summary_get",
        method="GET",
        path="/contracts/summaries/{id}",
        target="/contracts/summaries/{id}",
        failure_message="Failed to fetch contract summary with ID {id}",
        credential=CredentialMode.OPTIONAL,
    ),
    # Deposit and repair requests
    ProxyRoute(
        name="deposit_requests_list",
        method="GET",
        path="/deposit-requests",
        target="/deposit-requests",
        failure_message="Failed to fetch deposit requests",
        query_model=PropertyQuery,
        query_error=PROPERTY_ID_REQUIRED,
    ),
    ProxyRoute(
        name="deposit_requests_create",
        method="POST",
        path="/deposit-requests",
        target="/deposit-requests",
        failure_message="Failed to create deposit request",
        query_model=PropertyQuery,
        query_error=PROPERTY_ID_REQUIRED,
    ),
    ProxyRoute(
        name="repair_requests_list",
        method="GET",
        path="/repair-requests",
        target="/repair-requests",
        failure_message="Failed to fetch repair requests",
        query_model=PropertyQuery,
        query_error=PROPERTY_ID_REQUIRED,
    ),
    ProxyRoute(
        name="repair_requests_create",
        method="POST",
        path="/repair-requests",
        target="/repair-requests",
        failure_message="Failed to create repair request",
        query_model=PropertyQuery,
        query_error=PROPERTY_ID_REQUIRED,
    ),
    # Documents (served by the dedicated backend base)
    ProxyRoute(
        name="documents_delete",
        method="DELETE",
        path="/documents/{path:path}",
        target="/api/documents/{path}",
        failure_message="Failed to delete document",
        base=BackendBase.DEDICATED,
    ),
    ProxyRoute(
        name="documents_by_property",
        method="GET",
        path="/documents/{propertyId}",
        target="/api/documents/property/{propertyId}",
        failure_message="Failed to fetch documents",
        base=BackendBase.DEDICATED,
    ),
    # Invitations
    ProxyRoute(
        name="invitations_accept",
        method="POST",
        path="/invitations/accept",
        target="/property-users/invitations/accept",
        failure_message="Failed to accept invitation",
        body_model=InvitationAccept,
        body_error="Token is required",
        unwrap_envelope=True,
    ),
    # Properties
    ProxyRoute(
        name="properties_list",
        method="GET",
        path="/properties",
        target="/properties",
        failure_message="Failed to fetch properties",
    ),
    ProxyRoute(
        name="properties_create",
        method="POST",
        path="/properties",
        target="/properties",
        failure_message="Failed to create property",
        body_model=PropertyCreate,
        body_error="Name and postcode are required",
    ),
    ProxyRoute(
        name="properties_get",
        method="GET",
        path="/properties/{id}",
        target="/properties/{id}",
        failure_message="Failed to fetch property",
    ),
    ProxyRoute(
        name="properties_update",
        method="PUT",
        path="/properties/{id}",
        target="/properties/{id}",
        failure_message="Failed to update property",
    ),
    ProxyRoute(
        name="properties_delete",
        method="DELETE",
        path="/properties/{id}",
        target="/properties/{id}",
        failure_message="Failed to delete property",
    ),
    # Property users
    ProxyRoute(
        name="property_users_list",
        method="GET",
        path="/property-users",
        target="/property-users/properties/{propertyId}/users",
        failure_message="Failed to fetch property users",
        query_model=PropertyQuery,
        query_error=PROPERTY_ID_REQUIRED,
        unwrap_envelope=True,
        forward_query=False,
        resolve_target=_property_users_target,
    ),
    ProxyRoute(
        name="property_users_add",
        method="POST",
        path="/property-users",
        target="/property-users/properties/{propertyId}/users",
        failure_message="Failed to add user to property",
        query_model=PropertyQuery,
        query_error=PROPERTY_ID_REQUIRED,
        unwrap_envelope=True,
        forward_query=False,
        resolve_target=_property_users_target,
    ),
    ProxyRoute(
        name="property_users_remove",
        method="DELETE",
        path="/property-users/remove",
        target="/property-users/properties/{propertyId}/users/{userId}",
        failure_message="Failed to remove user from property",
        query_model=PropertyUserQuery,
        query_error="Property ID and User ID are required",
        forward_query=False,
        resolve_target=_property_user_target,
    ),
    # Stripe usage (full token validation)
    ProxyRoute(
        name="stripe_check_limits",
        method="GET",
        path="/stripe/check-limits",
        target="/stripe/check-limits",
        failure_message="Failed to check feature limits",
        credential=CredentialMode.FULL,
        query_model=FeatureQuery,
        query_error="Missing required parameter: feature",
        status_messages={401: AUTH_REQUIRED_MESSAGE},
    ),
    ProxyRoute(
        name="stripe_increment_usage",
        method="POST",
        path="/stripe/increment-usage",
        target="/stripe/increment-usage",
        failure_message="Failed to increment usage",
        credential=CredentialMode.FULL,
        body_model=UsageIncrement,
        body_error="Missing required parameter: feature",
        status_messages={401: AUTH_REQUIRED_MESSAGE},
        build_payload=_usage_increment_payload,
    ),
    # Timeline
    ProxyRoute(
        name="timeline_all",
        method="GET",
        path="/timeline/all",
        target="/timeline/all",
        failure_message="Failed to fetch timeline events",
        query_model=TimelineAllQuery,
        forward_query=False,
        resolve_target=_timeline_all_target,
    ),
    ProxyRoute(
        name="timeline_events_create",
        method="POST",
        path="/timeline/events",
        target="/timeline/events",
        failure_message="Failed to create timeline event",
        body_model=TimelineEventCreate,
        body_error="Missing required fields: property_id, title, event_type, start_date",
    ),
    ProxyRoute(
        name="timeline_events_update",
        method="PUT",
        path="/timeline/events/{id}",
        target="/timeline/events/{id}",
        failure_message="Failed to update timeline event",
    ),
    ProxyRoute(
        name="timeline_events_delete",
        method="DELETE",
        path="/timeline/events/{id}",
        target="/timeline/events/{id}",
        failure_message="Failed to delete timeline event",
    ),
    ProxyRoute(
        name="timeline_property_events",
        method="GET",
        path="/timeline/properties/{propertyId}/events",
        target="/api/timeline/properties/{propertyId}/events",
        failure_message="Failed to fetch timeline events",
        base=BackendBase.DEDICATED,
    ),
    ProxyRoute(
        name="timeline_property_sync",
        method="POST",
        path="/timeline/properties/{propertyId}/sync",
        target="/timeline/properties/{propertyId}/sync",
        failure_message="Failed to sync timeline",
    ),
    # Uploads
    ProxyRoute(
        name="upload_image_delete",
        method="DELETE",
        path="/upload/image",
        target="/upload/image",
        failure_message="Failed to delete image",
        query_model=PropertyQuery,
        query_error=PROPERTY_ID_REQUIRED,
        body_model=ImageDelete,
        body_error="Image path is required",
        build_payload=_image_delete_payload,
    ),
    ProxyRoute(
        name="upload_property_images",
        method="GET",
        path="/upload/property/{propertyId}/images",
        target="/upload/property/{propertyId}/images",
        failure_message="Failed to fetch property images",
    ),
    # Users
    ProxyRoute(
        name="users_lookup",
        method="GET",
        path="/users/lookup",
        target="/users/lookup",
        failure_message="Failed to lookup user",
        query_model=UserLookupQuery,
        query_error="Either email or id is required",
        unwrap_envelope=True,
        forward_query=False,
        resolve_target=_user_lookup_target,
    ),
)


def _make_endpoint(route: ProxyRoute):
    async def endpoint(request: Request, dispatcher: FromDishka[ProxyDispatcher]) -> Response:
        return await dispatcher.dispatch(route, request)

    endpoint.__name__ = route.name
    return endpoint


for _route in PROXY_ROUTES:
    router.add_api_route(
        _route.path,
        _make_endpoint(_route),
        methods=[_route.method],
        name=_route.name,
        summary=_route.name.replace("_", " ").capitalize(),
        response_model=None,
    )
