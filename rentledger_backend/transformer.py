"""Wire models for the REST layer and their mapping to storage entities."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from .errors import InvalidState
from .models import RentReceipt, Tenant
from .services.ledger import to_money


def _decimal(value, name):
    if value is None or value == "":
        return None
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidState(f"{name} must be a number, got {value!r}") from None
    if not number.is_finite():
        raise InvalidState(f"{name} must be a finite number, got {value!r}")
    return to_money(number, name)


def _date(value, name):
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidState(f"{name} must be in YYYY-MM-DD format") from None


def _datetime(value, name):
    if value is None or value == "":
        return None
    if not isinstance(value, datetime):
        try:
            value = datetime.fromisoformat(str(value).rstrip("Z"))
        except ValueError:
            raise InvalidState(f"{name} must be an ISO-8601 timestamp") from None
    # stored as naive UTC
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _str(value, name):
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidState(f"{name} must be a string")
    return value.strip() or None


def _receipts(value):
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidState("rent_receipts must be a list")
    return [RentReceiptModel.from_dict(r) for r in value]


def _int(value, name):
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidState(f"{name} must be an integer") from None


def _iso(value):
    return value.isoformat() if value else None


def _float(value):
    return float(value) if value is not None else None


@dataclass
class RentReceiptModel:
    amount: Optional[Decimal] = None
    id: Optional[int] = None
    creation_date: Optional[datetime] = None
    tenant_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RentReceiptModel":
        if not isinstance(data, dict):
            raise InvalidState("rent receipt must be a JSON object")
        return cls(
            id=_int(data.get("id"), "id"),
            amount=_decimal(data.get("amount"), "amount"),
            creation_date=_datetime(data.get("creation_date"), "creation_date"),
            tenant_id=_int(data.get("tenant_id"), "tenant_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "tenant_id": self.tenant_id,
            "amount": _float(self.amount),
            "creation_date": _iso(self.creation_date),
        }


@dataclass
class TenantModel:
    name: Optional[str] = None
    weekly_rent_amount: Decimal = Decimal("0")
    current_rent_credit_amount: Decimal = Decimal("0")
    current_rent_paid_to_date: Optional[date] = None
    id: Optional[int] = None
    creation_date: Optional[datetime] = None
    rent_receipts: list[RentReceiptModel] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TenantModel":
        return cls(
            id=_int(data.get("id"), "id"),
            name=_str(data.get("name"), "name"),
            weekly_rent_amount=_decimal(data.get("weekly_rent_amount"), "weekly_rent_amount") or Decimal("0"),
            current_rent_credit_amount=(
                _decimal(data.get("current_rent_credit_amount"), "current_rent_credit_amount") or Decimal("0")
            ),
            current_rent_paid_to_date=_date(data.get("current_rent_paid_to_date"), "current_rent_paid_to_date"),
            creation_date=_datetime(data.get("creation_date"), "creation_date"),
            rent_receipts=_receipts(data.get("rent_receipts")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "weekly_rent_amount": _float(self.weekly_rent_amount),
            "current_rent_credit_amount": _float(self.current_rent_credit_amount),
            "current_rent_paid_to_date": _iso(self.current_rent_paid_to_date),
            "creation_date": _iso(self.creation_date),
            "rent_receipts": [r.to_dict() for r in self.rent_receipts],
        }


class ModelEntityTransformer:
    """Converts wire models to storage entities and back, for tenants and receipts."""

    def to_entity(self, model):
        if isinstance(model, TenantModel):
            return self._tenant_entity(model)
        if isinstance(model, RentReceiptModel):
            return self._receipt_entity(model)
        raise TypeError(f"no entity mapping for {type(model).__name__}")

    def to_model(self, entity):
        if isinstance(entity, Tenant):
            return self._tenant_model(entity)
        if isinstance(entity, RentReceipt):
            return self._receipt_model(entity)
        raise TypeError(f"no model mapping for {type(entity).__name__}")

    def _tenant_entity(self, model):
        tenant = Tenant(
            id=model.id,
            name=model.name,
            weekly_rent_amount=model.weekly_rent_amount,
            current_rent_credit_amount=model.current_rent_credit_amount,
            current_rent_paid_to_date=model.current_rent_paid_to_date,
            creation_date=model.creation_date,
        )
        # An untouched collection is left alone when the tenant is merged
        # into an existing row, so receipts are only mapped when given.
        if model.rent_receipts:
            tenant.rent_receipts = [self._receipt_entity(r) for r in model.rent_receipts]
        return tenant

    def _receipt_entity(self, model):
        return RentReceipt(
            id=model.id,
            amount=model.amount,
            creation_date=model.creation_date,
            tenant_id=model.tenant_id,
        )

    def _tenant_model(self, tenant):
        return TenantModel(
            id=tenant.id,
            name=tenant.name,
            weekly_rent_amount=tenant.weekly_rent_amount,
            current_rent_credit_amount=tenant.current_rent_credit_amount,
            current_rent_paid_to_date=tenant.current_rent_paid_to_date,
            creation_date=tenant.creation_date,
            rent_receipts=[self._receipt_model(r) for r in tenant.rent_receipts],
        )

    def _receipt_model(self, receipt):
        return RentReceiptModel(
            id=receipt.id,
            amount=receipt.amount,
            creation_date=receipt.creation_date,
            tenant_id=receipt.tenant_id,
        )
