"""Purchase order workflow definition.

State flow:
    UPLOADED → CONFIRMED → SHIPPED → INVOICED → DELIVERED
    Any non-terminal status can move to CANCELLED

Terminal States: DELIVERED, CANCELLED

Requirements gate entry into a status and are evaluated against the data
passed with the transition request.
"""

from enum import Enum
from typing import Any

from .models import Requirement, RequirementLevel, StatusDefinition, StatusMetadata
from .workflow import WorkflowDefinition


class PurchaseOrderStatus(str, Enum):
    """Purchase order status enumeration (declaration order matters)."""
    UPLOADED = "UPLOADED"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    INVOICED = "INVOICED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class StatusColor(str, Enum):
    """Display colors per status."""
    UPLOADED = "#3498db"   # Blue
    CONFIRMED = "#2ecc71"  # Green
    SHIPPED = "#f39c12"    # Orange
    INVOICED = "#9b59b6"   # Purple
    DELIVERED = "#27ae60"  # Dark green
    CANCELLED = "#e74c3c"  # Red


def _header(data: Any) -> dict[str, Any]:
    return data.get("header") or {}


def _has_po_number(data: Any) -> bool:
    return bool(data.get("poNumber") or _header(data).get("poNumber"))


def _has_source_data(data: Any) -> bool:
    return bool(data.get("header") and data.get("products"))


def _no_validation_errors(data: Any) -> bool:
    return not data.get("validationErrors")


def _has_shipping_date(data: Any) -> bool:
    delivery_info = _header(data).get("deliveryInfo") or {}
    return bool(data.get("shippingDate") or delivery_info.get("date"))


def _has_invoice_details(data: Any) -> bool:
    return bool(data.get("invoiceNumber") and data.get("invoiceDate"))


def _has_delivery_confirmation(data: Any) -> bool:
    return bool(data.get("deliveryDate") and data.get("receivedBy"))


def _has_cancellation_reason(data: Any) -> bool:
    return bool(data.get("cancellationReason"))


PURCHASE_ORDER_STATUSES = (
    StatusDefinition(
        name=PurchaseOrderStatus.UPLOADED,
        label="Uploaded",
        description="PO has been uploaded to the dashboard",
        color=StatusColor.UPLOADED.value,
        allowed_transitions=[PurchaseOrderStatus.CONFIRMED, PurchaseOrderStatus.CANCELLED],
        requirements=[
            Requirement(
                name="validData",
                predicate=_has_source_data,
                message="Required PO data missing",
            ),
        ],
        metadata=StatusMetadata(editable=True),
    ),
    StatusDefinition(
        name=PurchaseOrderStatus.CONFIRMED,
        label="Confirmed",
        description="PO data verified and accepted",
        color=StatusColor.CONFIRMED.value,
        allowed_transitions=[PurchaseOrderStatus.SHIPPED, PurchaseOrderStatus.CANCELLED],
        requirements=[
            Requirement(
                name="poNumber",
                predicate=_has_po_number,
                message="PO number required",
            ),
            Requirement(
                name="dataVerified",
                predicate=_no_validation_errors,
                message="Data verification required",
            ),
        ],
        metadata=StatusMetadata(editable=True),
    ),
    StatusDefinition(
        name=PurchaseOrderStatus.SHIPPED,
        label="Shipped",
        description="Order has been shipped",
        color=StatusColor.SHIPPED.value,
        allowed_transitions=[PurchaseOrderStatus.INVOICED, PurchaseOrderStatus.CANCELLED],
        requirements=[
            Requirement(
                name="shippingDetails",
                predicate=_has_shipping_date,
                message="Shipping date required",
            ),
        ],
        metadata=StatusMetadata(requires_notes=True),
    ),
    StatusDefinition(
        name=PurchaseOrderStatus.INVOICED,
        label="Invoiced",
        description="Invoice has been sent",
        color=StatusColor.INVOICED.value,
        allowed_transitions=[PurchaseOrderStatus.DELIVERED, PurchaseOrderStatus.CANCELLED],
        requirements=[
            Requirement(
                name="invoiceDetails",
                predicate=_has_invoice_details,
                message="Invoice details required",
            ),
        ],
        metadata=StatusMetadata(requires_notes=True),
    ),
    StatusDefinition(
        name=PurchaseOrderStatus.DELIVERED,
        label="Delivered",
        description="Order successfully delivered",
        color=StatusColor.DELIVERED.value,
        allowed_transitions=[],
        requirements=[
            Requirement(
                name="deliveryConfirmation",
                predicate=_has_delivery_confirmation,
                message="Delivery confirmation required",
            ),
        ],
        metadata=StatusMetadata(is_terminal=True, requires_notes=True),
    ),
    StatusDefinition(
        name=PurchaseOrderStatus.CANCELLED,
        label="Cancelled",
        description="Order has been cancelled",
        color=StatusColor.CANCELLED.value,
        allowed_transitions=[],
        requirements=[
            # Notes are enforced through requires_notes; a reason is only advised
            Requirement(
                name="cancellationReason",
                predicate=_has_cancellation_reason,
                message="Cancellation reason recommended",
                level=RequirementLevel.RECOMMENDED,
            ),
        ],
        metadata=StatusMetadata(is_terminal=True, requires_notes=True),
    ),
)


PURCHASE_ORDER_WORKFLOW = WorkflowDefinition(
    name="purchase_order",
    initial=PurchaseOrderStatus.UPLOADED,
    statuses=PURCHASE_ORDER_STATUSES,
    cancelled_status=PurchaseOrderStatus.CANCELLED,
    version="1.0.0",
    description="Purchase Order workflow from upload through delivery",
    last_updated="2025-02-05",
)
