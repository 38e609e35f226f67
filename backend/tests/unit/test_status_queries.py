"""Unit tests for StatusQueryFacade

Accessors never raise: unknown statuses give neutral defaults.
"""

from enum import Enum

import pytest

from po_workflow.domain.status import (
    PurchaseOrderStatus,
    StatusColor,
    StatusMetadata,
    StatusQueryFacade,
    TransitionManager,
    WorkflowDefinition,
)


@pytest.fixture
def queries(workflow):
    return StatusQueryFacade(workflow)


class TestKnownStatuses:
    """Test lookups for declared statuses"""

    def test_get_statuses_in_declaration_order(self, queries):
        """Test statuses are listed in declaration order"""
        assert list(queries.get_statuses()) == [
            "UPLOADED", "CONFIRMED", "SHIPPED", "INVOICED", "DELIVERED", "CANCELLED"
        ]

    def test_get_status(self, queries):
        """Test a single status definition"""
        status = queries.get_status("SHIPPED")

        assert status.name == "SHIPPED"
        assert status.label == "Shipped"
        assert status.allowed_transitions == ("INVOICED", "CANCELLED")

    def test_enum_members_accepted(self, queries):
        """Test PurchaseOrderStatus members work as identifiers"""
        assert queries.get_status(PurchaseOrderStatus.CONFIRMED).name == "CONFIRMED"
        assert queries.is_valid_status(PurchaseOrderStatus.CONFIRMED) is True

    def test_initial_status(self, queries):
        assert queries.get_initial_status() == "UPLOADED"

    def test_available_transitions(self, queries):
        """Test available transitions follow the graph"""
        assert queries.get_available_transitions("UPLOADED") == ["CONFIRMED", "CANCELLED"]
        assert queries.get_available_transitions("INVOICED") == ["DELIVERED", "CANCELLED"]

    def test_terminal_statuses_have_no_transitions(self, queries):
        """Test terminal statuses expose an empty transition list"""
        assert queries.get_available_transitions("DELIVERED") == []
        assert queries.get_available_transitions("CANCELLED") == []

    def test_metadata_flags(self, queries):
        """Test terminal / notes / editable flags"""
        assert queries.is_terminal_status("DELIVERED") is True
        assert queries.is_terminal_status("SHIPPED") is False
        assert queries.requires_notes("SHIPPED") is True
        assert queries.requires_notes("UPLOADED") is False
        assert queries.is_editable("UPLOADED") is True
        assert queries.is_editable("INVOICED") is False

    def test_display_attributes(self, queries):
        """Test color, label and description"""
        assert queries.get_status_color("CANCELLED") == StatusColor.CANCELLED.value
        assert queries.get_status_label("INVOICED") == "Invoiced"
        assert queries.get_status_description("DELIVERED") == "Order successfully delivered"

    def test_requirements(self, queries):
        """Test requirement registry keeps declaration order"""
        requirements = queries.get_status_requirements("CONFIRMED")

        assert list(requirements) == ["poNumber", "dataVerified"]
        assert requirements["poNumber"].message == "PO number required"


class TestUnknownStatuses:
    """Test neutral defaults for unknown statuses"""

    @pytest.mark.parametrize("status", ["UNKNOWN", "", None, 42, ["UPLOADED"]])
    def test_never_raises(self, queries, status):
        """Test every accessor degrades gracefully"""
        assert queries.get_status(status) is None
        assert queries.is_valid_status(status) is False
        assert queries.get_available_transitions(status) == []
        assert queries.is_terminal_status(status) is False
        assert queries.requires_notes(status) is False
        assert queries.is_editable(status) is False
        assert queries.get_status_color(status) is None
        assert queries.get_status_description(status) is None
        assert dict(queries.get_status_requirements(status)) == {}
        assert queries.get_status_metadata(status) == StatusMetadata()

    def test_label_falls_back_to_identifier(self, queries):
        """Test unknown status label is the raw identifier"""
        assert queries.get_status_label("ON_HOLD") == "ON_HOLD"

    @pytest.mark.parametrize("status", [["X"], None, 42])
    def test_label_is_always_a_string(self, queries, status):
        """Test non-string identifiers are rendered as text"""
        assert queries.get_status_label(status) == str(status)


class TestEnumIdentifiers:
    """Test plain Enum members agree across every lookup"""

    def test_plain_enum_members(self, make_status):
        """Test a plain Enum member is valid wherever get_status finds it"""

        class Stage(Enum):
            OPEN = "OPEN"
            DONE = "DONE"

        workflow = WorkflowDefinition(
            initial=Stage.OPEN,
            statuses=[
                make_status(Stage.OPEN, [Stage.DONE], label="Open"),
                make_status(Stage.DONE, terminal=True, label="Done"),
            ],
        )
        queries = StatusQueryFacade(workflow)

        assert queries.get_status(Stage.OPEN).name == "OPEN"
        assert queries.is_valid_status(Stage.OPEN) is True
        assert queries.get_available_transitions(Stage.OPEN) == ["DONE"]
        assert TransitionManager(workflow).validate_transition(Stage.OPEN, Stage.DONE).valid is True
