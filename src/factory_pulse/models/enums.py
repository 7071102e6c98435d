"""String enums for the project workflow domain."""

from enum import StrEnum


class ProjectStage(StrEnum):
    INQUIRY_RECEIVED = "inquiry_received"
    TECHNICAL_REVIEW = "technical_review"
    SUPPLIER_RFQ_SENT = "supplier_rfq_sent"
    QUOTED = "quoted"
    ORDER_CONFIRMED = "order_confirmed"
    PROCUREMENT_PLANNING = "procurement_planning"
    IN_PRODUCTION = "in_production"
    SHIPPED_CLOSED = "shipped_closed"


class UserRole(StrEnum):
    SALES = "sales"
    PROCUREMENT = "procurement"
    PROCUREMENT_OWNER = "procurement_owner"
    ENGINEERING = "engineering"
    QA = "qa"
    PRODUCTION = "production"
    MANAGEMENT = "management"
    ADMIN = "admin"


class SupplierQuoteStatus(StrEnum):
    SENT = "sent"
    RECEIVED = "received"
    REJECTED = "rejected"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class ProjectPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"
