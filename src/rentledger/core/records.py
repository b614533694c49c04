# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Source records consumed by the statement engine.

These models mirror the already-deserialized payloads of the property
management API. Field names are snake_case; camelCase API keys are accepted
through an alias generator so a JSON payload can be validated directly with
``model_validate``. Keys the engine does not use are ignored.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import AliasChoices, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .charges import (
    ChargeDefinition,
    FixedCharge,
    PerAreaCharge,
    PercentageOfRentCharge,
)
from .primitives import (
    BillTypeEnum,
    Model,
    Percentage,
    PositiveFloat,
    VatTreatmentEnum,
)

logger = logging.getLogger(__name__)


def _coerce_date(value: Any) -> Any:
    """Accept ISO strings and datetimes where a calendar date is expected."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and value:
        # The API emits UTC timestamps such as 2024-03-01T00:00:00.000Z
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    if value == "":
        return None
    return value


def _none_as_zero(value: Any) -> Any:
    return 0.0 if value is None else value


class RecordModel(Model):
    """Base for API-backed records: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class PropertyRecord(RecordModel):
    id: str
    name: str
    address: Optional[str] = None


class IncomeEntry(RecordModel):
    """A payment received from a tenant."""

    id: Optional[str] = None
    tenant_id: Optional[str] = None
    amount: float
    created_at: Optional[date] = None

    @field_validator("created_at", mode="before")
    @classmethod
    def validate_created_at(cls, v: Any) -> Any:
        return _coerce_date(v)


class TenantRecord(RecordModel):
    """
    A tenant together with its charge and VAT configuration.

    A tenant without a service charge is valid and means "no service
    charge". A tenant without a VAT treatment is treated as
    NOT_APPLICABLE.
    """

    id: str
    full_name: str
    contact: str = ""
    email: Optional[str] = None
    kra_pin: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("kra_pin", "KRAPin", "kraPin")
    )
    unit_id: Optional[str] = None
    rent: Optional[PositiveFloat] = None
    deposit: PositiveFloat = 0.0
    service_charge: Optional[ChargeDefinition] = None
    vat_treatment: VatTreatmentEnum = Field(
        default=VatTreatmentEnum.NOT_APPLICABLE,
        validation_alias=AliasChoices("vat_treatment", "vatTreatment", "vatType"),
    )
    vat_rate: Optional[Percentage] = None
    term_start: Optional[date] = None
    incomes: List[IncomeEntry] = Field(default_factory=list)

    @field_validator("term_start", mode="before")
    @classmethod
    def validate_term_start(cls, v: Any) -> Any:
        return _coerce_date(v)

    @field_validator("deposit", mode="before")
    @classmethod
    def validate_deposit(cls, v: Any) -> Any:
        return _none_as_zero(v)

    @field_validator("vat_treatment", mode="before")
    @classmethod
    def validate_vat_treatment(cls, v: Any) -> Any:
        if v is None or v == "":
            return VatTreatmentEnum.NOT_APPLICABLE
        return v

    @field_validator("incomes", mode="before")
    @classmethod
    def validate_incomes(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("service_charge", mode="before")
    @classmethod
    def validate_service_charge(cls, v: Any) -> Any:
        """
        Translate the API's string-tagged charge shape into a charge variant.

        The API sends ``{"type": "PERCENTAGE", "percentage": 10, ...}`` with
        the variant's value in one of several optional fields. Missing
        values degrade to zero and unrecognised types to no charge.
        """
        if not isinstance(v, dict) or "kind" in v or "type" not in v:
            return v

        charge_type = str(v.get("type") or "").upper()
        if charge_type == "FIXED":
            return FixedCharge(amount=v.get("fixedAmount") or 0)
        if charge_type == "PERCENTAGE":
            return PercentageOfRentCharge(percent=v.get("percentage") or 0)
        if charge_type == "PER_SQ_FT":
            return PerAreaCharge(rate_per_unit_area=v.get("perSqFtRate") or 0)

        logger.warning(
            f"Ignoring service charge with unrecognised type {v.get('type')!r}"
        )
        return None


class UnitRecord(RecordModel):
    """
    A lettable unit.

    Attributes:
        location: Free-text type/location label (e.g. "Ground floor shop")
            used to infer the unit's structural group.
        size_sq_ft: Floor area used by per-area service charges.
        rent_amount: Base rent per period.
        tenant_id: Current tenant, if the unit is let.
        tenant: Current tenant as embedded by the API's unit endpoint.
    """

    id: str
    unit_no: Optional[str] = None
    location: str = Field(
        default="", validation_alias=AliasChoices("location", "type")
    )
    floor: Optional[str] = None
    usage: Optional[str] = None
    size_sq_ft: PositiveFloat = 0.0
    rent_amount: PositiveFloat = 0.0
    tenant_id: Optional[str] = None
    tenant: Optional[TenantRecord] = None

    @model_validator(mode="before")
    @classmethod
    def link_nested_tenant(cls, data: Any) -> Any:
        """Take ``tenant_id`` from an embedded tenant when no id is given."""
        if not isinstance(data, dict):
            return data
        if data.get("tenantId") is not None or data.get("tenant_id") is not None:
            return data

        tenant = data.get("tenant")
        if isinstance(tenant, dict):
            tenant_id = tenant.get("id")
        else:
            tenant_id = getattr(tenant, "id", None)
        if tenant_id is None:
            return data

        linked = {key: value for key, value in data.items() if key != "tenantId"}
        linked["tenant_id"] = tenant_id
        return linked

    @model_validator(mode="after")
    def validate_tenant_link(self) -> "UnitRecord":
        if self.tenant is not None and self.tenant.id != self.tenant_id:
            raise ValueError(
                f"Unit {self.id} names tenant {self.tenant_id} but embeds tenant {self.tenant.id}"
            )
        return self

    @field_validator("location", mode="before")
    @classmethod
    def validate_location(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("size_sq_ft", "rent_amount", mode="before")
    @classmethod
    def validate_amounts(cls, v: Any) -> Any:
        return _none_as_zero(v)


class RentPeriodRecord(RecordModel):
    """
    The rent obligation of one tenant for one billing period.

    Mirrors a payment report: what was due for the period and what was paid
    against it.
    """

    id: Optional[str] = None
    tenant_id: str
    payment_period: date
    rent: PositiveFloat = 0.0
    service_charge: PositiveFloat = 0.0
    vat: PositiveFloat = 0.0
    total_due: PositiveFloat
    amount_paid: float = 0.0
    date_paid: Optional[date] = None
    due_date: Optional[date] = None
    invoice_number: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("payment_period", "date_paid", "due_date", mode="before")
    @classmethod
    def validate_dates(cls, v: Any) -> Any:
        return _coerce_date(v)

    @field_validator("rent", "service_charge", "vat", "amount_paid", mode="before")
    @classmethod
    def validate_amounts(cls, v: Any) -> Any:
        return _none_as_zero(v)


class BillInvoiceRecord(RecordModel):
    """A metered utility bill invoice issued to a tenant."""

    id: Optional[str] = None
    tenant_id: str
    invoice_number: str
    bill_type: BillTypeEnum
    units: PositiveFloat = 0.0
    charge_per_unit: PositiveFloat = 0.0
    total_amount: PositiveFloat = 0.0
    vat_rate: Optional[Percentage] = None
    vat_amount: PositiveFloat = 0.0
    grand_total: PositiveFloat
    amount_paid: float = 0.0
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    status: Optional[str] = None

    @field_validator("issue_date", "due_date", mode="before")
    @classmethod
    def validate_dates(cls, v: Any) -> Any:
        return _coerce_date(v)

    @field_validator(
        "units", "charge_per_unit", "total_amount", "vat_amount", "amount_paid",
        mode="before",
    )
    @classmethod
    def validate_amounts(cls, v: Any) -> Any:
        return _none_as_zero(v)

    @property
    def balance(self) -> float:
        return self.grand_total - self.amount_paid

    @property
    def is_cancelled(self) -> bool:
        return (self.status or "").upper() == "CANCELLED"


class PropertySnapshot(Model):
    """
    Everything one export needs, fetched once and never mutated.

    Attributes:
        property: The property being reported on.
        units: Units in the order the API returned them; this order drives
            row and group ordering in statements.
        tenants: Tenants occupying (or formerly occupying) the units.
        incomes: Payments received, attributed to tenants by ``tenant_id``.
        rent_periods: Per-period rent obligations (for arrears and payment
            reports).
        bill_invoices: Utility bill invoices (for arrears and bill reports).
    """

    property: PropertyRecord
    units: List[UnitRecord] = Field(default_factory=list)
    tenants: List[TenantRecord] = Field(default_factory=list)
    incomes: List[IncomeEntry] = Field(default_factory=list)
    rent_periods: List[RentPeriodRecord] = Field(default_factory=list)
    bill_invoices: List[BillInvoiceRecord] = Field(default_factory=list)
