"""
The organization tool catalogue.

Each tool is a pydantic argument model whose docstring is the tool
description. Field titles are the friendly labels used in confirmation
summaries; they are stripped from the schema sent to the model.
"""

import re
from datetime import datetime
from typing import Annotated, List, Literal, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from arthur_assistant.core import OperationCategory, ToolRegistry, get_logger

logger = get_logger(__name__)

# Filled from the request context, never asked of the user
CONTEXT_FIELDS = frozenset({"organization_id", "created_by", "reporter_id", "requester_id"})

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_CLASS_NAME_RE = re.compile(r"^[a-z][a-z0-9_]*$")

OrganizationId = Annotated[str, Field(min_length=1, description="ID of the organization, taken from the context.")]
MemberId = Annotated[str, Field(min_length=1, title="Member", description="user_id of the member, looked up by name.")]
Role = Literal["admin", "member"]


class ToolArgs(BaseModel):
    """Base for all tool argument models."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    organization_id: OrganizationId


# --- Read ---


class ListMembers(ToolArgs):
    """List the organization's members with their names, roles and membership tiers."""


class ListEvents(ToolArgs):
    """List the organization's events, optionally only those that have not started yet."""

    upcoming_only: Annotated[
        bool, Field(title="Upcoming Only", description="Only return events starting in the future.")
    ] = False


class ListAnnouncements(ToolArgs):
    """List the most recent announcements of the organization."""

    limit: Annotated[
        int, Field(ge=1, le=100, title="Limit", description="Maximum number of announcements to return.")
    ] = 10


class GetMemberBalance(ToolArgs):
    """Get the current balance of a member. Positive values mean the member owes money."""

    user_id: MemberId


class ListTransactions(ToolArgs):
    """List payment transactions of the organization, optionally for a single member."""

    user_id: Annotated[
        Optional[str], Field(title="Member", description="Restrict the list to this member's user_id.")
    ] = None


class ListPaymentClasses(ToolArgs):
    """List the membership tiers (payment classes) with their dues and billing frequency."""


class ListIncidentReports(ToolArgs):
    """List the incident reports filed in the organization."""


class ListRides(ToolArgs):
    """List ride requests, optionally filtered by status."""

    status: Annotated[
        Optional[Literal["pending", "accepted", "completed", "cancelled"]],
        Field(title="Status", description="Only return rides with this status."),
    ] = None


# --- Create ---


class CreateEvent(ToolArgs):
    """Create an event on the organization calendar. Requires a confirmed summary."""

    created_by: Annotated[str, Field(min_length=1, description="user_id of the current user.")]
    title: Annotated[str, Field(min_length=1, title="Event Name", description="Name of the event.")]
    start_time: Annotated[
        datetime, Field(title="Start Time", description="Start of the event as YYYY-MM-DDTHH:MM:SS.")
    ]
    end_time: Annotated[datetime, Field(title="End Time", description="End of the event as YYYY-MM-DDTHH:MM:SS.")]
    location: Annotated[Optional[str], Field(title="Location", description="Where the event takes place.")] = None
    description: Annotated[
        Optional[str], Field(title="Description", description="Additional details about the event.")
    ] = None

    @model_validator(mode="after")
    def check_times(self) -> "CreateEvent":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class CreateAnnouncement(ToolArgs):
    """Post an announcement visible to all members. Requires a confirmed summary."""

    created_by: Annotated[str, Field(min_length=1, description="user_id of the current user.")]
    title: Annotated[str, Field(min_length=1, title="Title", description="Subject line of the announcement.")]
    content: Annotated[str, Field(min_length=1, title="Message", description="Full text of the announcement.")]


class RecordTransaction(ToolArgs):
    """Record a charge, payment or dues transaction on a member's account. Requires a confirmed summary."""

    user_id: MemberId
    amount: Annotated[float, Field(gt=0, title="Amount", description="Amount in dollars.")]
    type: Annotated[
        Literal["charge", "payment", "dues"],
        Field(
            title="Type",
            description="charge and dues add to the member's balance, payment reduces it.",
        ),
    ]
    description: Annotated[str, Field(min_length=1, title="Description", description="Reason for the transaction.")]


class CreatePaymentClass(ToolArgs):
    """Create a membership tier (payment class). Requires a confirmed summary."""

    display_name: Annotated[str, Field(min_length=1, title="Tier Name", description="Name members see.")]
    class_name: Annotated[
        str,
        Field(
            min_length=1,
            title="Internal Name",
            description="Internal identifier in lowercase with underscores, derived from the display name.",
        ),
    ]
    dues_amount: Annotated[float, Field(gt=0, title="Dues Amount", description="Dues in dollars.")]
    frequency: Annotated[
        Literal["semester", "monthly", "annual", "one_time"],
        Field(title="Frequency", description="How often the dues are billed."),
    ]
    description: Annotated[Optional[str], Field(title="Description", description="Notes about this tier.")] = None

    @field_validator("class_name")
    @classmethod
    def check_class_name(cls, value: str) -> str:
        if not _CLASS_NAME_RE.match(value):
            raise ValueError("class_name must be lowercase letters, digits and underscores")
        return value


class CreateIncidentReport(ToolArgs):
    """File an incident report. Requires a confirmed summary."""

    reporter_id: Annotated[str, Field(min_length=1, description="user_id of the current user.")]
    title: Annotated[str, Field(min_length=1, title="Title", description="Short description of the incident.")]
    description: Annotated[
        str, Field(min_length=1, title="Description", description="Full account of what happened.")
    ]
    occurred_at: Annotated[
        datetime, Field(title="When", description="When the incident happened as YYYY-MM-DDTHH:MM:SS.")
    ]
    severity: Annotated[
        Literal["low", "medium", "high", "critical"],
        Field(title="Severity", description="How serious the incident is."),
    ]
    location: Annotated[Optional[str], Field(title="Where", description="Where the incident happened.")] = None


class CreateRideRequest(ToolArgs):
    """Request a ride for the current user. Requires a confirmed summary."""

    requester_id: Annotated[str, Field(min_length=1, description="user_id of the current user.")]
    pickup_location: Annotated[str, Field(min_length=1, title="Pickup", description="Where to be picked up.")]
    dropoff_location: Annotated[str, Field(min_length=1, title="Drop-off", description="Where to be dropped off.")]
    pickup_time: Annotated[
        Optional[datetime], Field(title="Pickup Time", description="Requested pickup time as YYYY-MM-DDTHH:MM:SS.")
    ] = None
    notes: Annotated[Optional[str], Field(title="Notes", description="Special notes for the driver.")] = None


class AddMember(ToolArgs):
    """Add a person to the organization by e-mail address. Requires a confirmed summary."""

    email: Annotated[str, Field(min_length=3, title="Email", description="E-mail address of the new member.")]
    role: Annotated[Role, Field(title="Role", description="Role in the organization.")] = "member"
    payment_class: Annotated[
        Optional[str], Field(title="Tier", description="class_name of the membership tier to assign.")
    ] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not _EMAIL_RE.match(value):
            raise ValueError("email must be a valid e-mail address")
        return value.lower()


# --- Update ---


class UpdateMemberRole(ToolArgs):
    """Change a member's role. Requires a confirmed summary."""

    user_id: MemberId
    role: Annotated[Role, Field(title="New Role", description="The role to assign.")]


class UpdateMemberPaymentClass(ToolArgs):
    """Move a member to another membership tier. Requires a confirmed summary."""

    user_id: MemberId
    payment_class: Annotated[
        str, Field(min_length=1, title="New Tier", description="class_name of the membership tier to assign.")
    ]


class UpdateEvent(ToolArgs):
    """Change details of an existing event. Only the given fields are updated. Requires a confirmed summary."""

    event_id: Annotated[str, Field(min_length=1, title="Event", description="ID of the event, looked up by name.")]
    title: Annotated[Optional[str], Field(title="Event Name", description="New name of the event.")] = None
    start_time: Annotated[
        Optional[datetime], Field(title="Start Time", description="New start as YYYY-MM-DDTHH:MM:SS.")
    ] = None
    end_time: Annotated[
        Optional[datetime], Field(title="End Time", description="New end as YYYY-MM-DDTHH:MM:SS.")
    ] = None
    location: Annotated[Optional[str], Field(title="Location", description="New location.")] = None
    description: Annotated[Optional[str], Field(title="Description", description="New description.")] = None

    @model_validator(mode="after")
    def check_changes(self) -> "UpdateEvent":
        changes = ("title", "start_time", "end_time", "location", "description")
        if all(getattr(self, name) is None for name in changes):
            raise ValueError("at least one field to change is required")
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


# --- Delete ---


class DeleteEvent(ToolArgs):
    """Delete an event from the calendar. Requires a confirmed summary."""

    event_id: Annotated[str, Field(min_length=1, title="Event", description="ID of the event, looked up by name.")]


class RemoveMember(ToolArgs):
    """Remove a member from the organization. Requires a confirmed summary."""

    user_id: MemberId


CATALOGUE: List[Tuple[str, OperationCategory, Type[ToolArgs]]] = [
    ("list_members", OperationCategory.READ, ListMembers),
    ("list_events", OperationCategory.READ, ListEvents),
    ("list_announcements", OperationCategory.READ, ListAnnouncements),
    ("get_member_balance", OperationCategory.READ, GetMemberBalance),
    ("list_transactions", OperationCategory.READ, ListTransactions),
    ("list_payment_classes", OperationCategory.READ, ListPaymentClasses),
    ("list_incident_reports", OperationCategory.READ, ListIncidentReports),
    ("list_rides", OperationCategory.READ, ListRides),
    ("create_event", OperationCategory.CREATE, CreateEvent),
    ("create_announcement", OperationCategory.CREATE, CreateAnnouncement),
    ("record_transaction", OperationCategory.CREATE, RecordTransaction),
    ("create_payment_class", OperationCategory.CREATE, CreatePaymentClass),
    ("create_incident_report", OperationCategory.CREATE, CreateIncidentReport),
    ("create_ride_request", OperationCategory.CREATE, CreateRideRequest),
    ("add_member", OperationCategory.CREATE, AddMember),
    ("update_member_role", OperationCategory.UPDATE, UpdateMemberRole),
    ("update_member_payment_class", OperationCategory.UPDATE, UpdateMemberPaymentClass),
    ("update_event", OperationCategory.UPDATE, UpdateEvent),
    ("delete_event", OperationCategory.DELETE, DeleteEvent),
    ("remove_member", OperationCategory.DELETE, RemoveMember),
]


def build_registry() -> ToolRegistry:
    """
    Build and seal the registry holding the whole organization catalogue.

    Returns:
        A sealed ToolRegistry.
    """
    registry = ToolRegistry()
    for name, category, args_model in CATALOGUE:
        description = (args_model.__doc__ or "").strip()
        registry.register_model(name, description, args_model, category)
    registry.seal()
    return registry
