from datetime import date
from typing import Any, Dict

import pytest
from pydantic import ValidationError

from arthur_assistant.catalog import CATALOGUE, CONTEXT_FIELDS, build_instructions, build_registry, describe_operation
from arthur_assistant.catalog.tools import AddMember, CreateEvent, CreatePaymentClass, RecordTransaction, UpdateEvent
from arthur_assistant.core import OperationCategory, RequestContext, ToolRegistry
from arthur_assistant.core.exceptions import ToolRegistrationError

EVENT: Dict[str, Any] = {
    "organization_id": "org-1",
    "created_by": "user-1",
    "title": "Spring Party",
    "start_time": "2025-03-20T19:00:00",
    "end_time": "2025-03-20T23:00:00",
}


def test_registry_holds_the_whole_catalogue(registry: ToolRegistry) -> None:
    assert len(registry) == len(CATALOGUE) == 20
    assert registry.sealed
    assert set(registry.write_tools) == {
        "create_event",
        "create_announcement",
        "record_transaction",
        "create_payment_class",
        "create_incident_report",
        "create_ride_request",
        "add_member",
        "update_member_role",
        "update_member_payment_class",
        "update_event",
        "delete_event",
        "remove_member",
    }
    assert registry.get("remove_member").category is OperationCategory.DELETE


def test_every_tool_takes_organization_id(registry: ToolRegistry) -> None:
    for spec in registry:
        assert "organization_id" in spec.parameters["required"], spec.name
        assert spec.description


def test_sealed_catalogue_rejects_new_tools(registry: ToolRegistry) -> None:
    with pytest.raises(ToolRegistrationError):
        registry.register_model("list_members", "again", CreateEvent, "read")


def test_required_and_optional_fields(registry: ToolRegistry) -> None:
    create_event = registry.get("create_event").parameters
    assert set(create_event["required"]) == {"organization_id", "created_by", "title", "start_time", "end_time"}
    assert set(create_event["properties"]) - set(create_event["required"]) == {"location", "description"}

    add_member = registry.get("add_member").parameters
    assert add_member["properties"]["role"]["enum"] == ["admin", "member"]
    assert add_member["properties"]["role"]["default"] == "member"


def test_event_must_end_after_start() -> None:
    with pytest.raises(ValidationError, match="end_time must be after start_time"):
        CreateEvent.model_validate(dict(EVENT, end_time="2025-03-20T18:00:00"))


def test_transaction_amount_must_be_positive() -> None:
    args = {"organization_id": "org-1", "user_id": "u1", "type": "charge", "description": "Dues"}
    assert RecordTransaction.model_validate(dict(args, amount=50)).amount == 50
    with pytest.raises(ValidationError):
        RecordTransaction.model_validate(dict(args, amount=0))


@pytest.mark.parametrize("class_name, valid", [("associate_member", True), ("Associate Member", False), ("_x", False)])
def test_payment_class_name_format(class_name: str, valid: bool) -> None:
    args = {
        "organization_id": "org-1",
        "display_name": "Associate Member",
        "class_name": class_name,
        "dues_amount": 100,
        "frequency": "semester",
    }
    if valid:
        assert CreatePaymentClass.model_validate(args).class_name == class_name
    else:
        with pytest.raises(ValidationError):
            CreatePaymentClass.model_validate(args)


def test_add_member_email() -> None:
    member = AddMember.model_validate({"organization_id": "org-1", "email": "John@Example.com"})
    assert member.email == "john@example.com"
    assert member.role == "member"
    with pytest.raises(ValidationError):
        AddMember.model_validate({"organization_id": "org-1", "email": "john at example"})


def test_update_event_needs_a_change() -> None:
    with pytest.raises(ValidationError, match="at least one field"):
        UpdateEvent.model_validate({"organization_id": "org-1", "event_id": "evt-1"})
    assert UpdateEvent.model_validate({"organization_id": "org-1", "event_id": "evt-1", "location": "Hall"})


def test_unknown_arguments_are_rejected() -> None:
    with pytest.raises(ValidationError):
        CreateEvent.model_validate(dict(EVENT, budget=500))


def test_instructions_include_context_and_operations(registry: ToolRegistry) -> None:
    context = RequestContext(organization_id="org-42", user_id="user-7", today=date(2025, 3, 1))

    instructions = build_instructions(context, registry.specs)

    assert "Organization ID: org-42" in instructions
    assert "User ID: user-7" in instructions
    assert "2025-03-01" in instructions
    assert "**create_event** (create)" in instructions
    assert "- Location (optional)" in instructions
    assert "- Event Name (required)" in instructions
    assert "**list_members**" not in instructions
    assert "go ahead" in instructions


def test_describe_operation_hides_context_fields(registry: ToolRegistry) -> None:
    description = describe_operation(registry.get("create_incident_report"))

    for field in CONTEXT_FIELDS:
        assert f"{field} (" not in description
    assert "- Severity (required)" in description
    assert "- Where (optional)" in description


def test_build_registry_returns_fresh_registries() -> None:
    assert build_registry() is not build_registry()
