import logging
from datetime import datetime, timedelta
from functools import wraps
from typing import Optional

from ..clock import SystemClock
from ..errors import InvalidState
from ..repositories import RentReceiptRepository, TenantRepository, translate_errors
from ..transformer import ModelEntityTransformer
from .ledger import apply_receipt, to_money

logger = logging.getLogger(__name__)


def transactional(fn):
    """Commit the session when `fn` returns, roll it back when it raises."""
    @wraps(fn)
    def wrapper(self, *args, **kwargs):
        try:
            result = fn(self, *args, **kwargs)
            translate_errors(self.session.commit)()
        except Exception:
            self.session.rollback()
            raise
        return result
    return wrapper


class TenantService:
    def __init__(self, tenant_repository, rent_receipt_repository, transformer, clock=None):
        self.tenant_repository = tenant_repository
        self.rent_receipt_repository = rent_receipt_repository
        self.transformer = transformer
        self.clock = clock or SystemClock()

    @property
    def session(self):
        return self.tenant_repository.session

    @transactional
    def save(self, tenant_model):
        """Saves the tenant and returns its wire model.

        A missing creation date is taken from the stored tenant when one
        exists, otherwise from the clock.
        """
        tenant = self.transformer.to_entity(tenant_model)
        if tenant.weekly_rent_amount is not None and tenant.weekly_rent_amount < 0:
            raise InvalidState("weekly_rent_amount must not be negative")
        if tenant.current_rent_credit_amount is not None and tenant.current_rent_credit_amount < 0:
            raise InvalidState("current_rent_credit_amount must not be negative")
        to_money(tenant.weekly_rent_amount, "weekly_rent_amount")
        to_money(tenant.current_rent_credit_amount, "current_rent_credit_amount")

        existing = self.tenant_repository.find_optional(tenant.id)
        if existing is not None:
            tenant.creation_date = existing.creation_date
            if (
                tenant.current_rent_paid_to_date is not None
                and tenant.current_rent_paid_to_date < existing.current_rent_paid_to_date
            ):
                raise InvalidState("current_rent_paid_to_date must not move backwards")
        elif tenant.creation_date is None:
            tenant.creation_date = self.clock.now()
        if tenant.current_rent_paid_to_date is None:
            tenant.current_rent_paid_to_date = (
                existing.current_rent_paid_to_date if existing is not None else tenant.creation_date.date()
            )

        tenant = self.tenant_repository.save(tenant)
        logger.info("Saved tenant %s", tenant.id)
        return self.transformer.to_model(tenant)

    def get(self, tenant_id):
        """Returns the tenant referenced by `tenant_id`, or raises NotFound."""
        return self.transformer.to_model(self.tenant_repository.find_by_id(tenant_id))

    def list_tenants(self, paid_in_last_hours: Optional[int] = None):
        """All tenants, or only those with a receipt in the last `paid_in_last_hours` hours."""
        if paid_in_last_hours is not None:
            if paid_in_last_hours < 0:
                raise InvalidState("paid_in_last_hours must not be negative")
            end_date = self.clock.now()
            try:
                start_date = end_date - timedelta(hours=paid_in_last_hours)
            except OverflowError:
                start_date = datetime.min
            matches = self.tenant_repository.find_distinct_by_receipt_date_range(start_date, end_date)
        else:
            matches = self.tenant_repository.find_all()
        return [self.transformer.to_model(tenant) for tenant in matches]

    def list_receipts(self, tenant_id):
        self.tenant_repository.find_by_id(tenant_id)
        receipts = self.rent_receipt_repository.find_by_tenant(tenant_id)
        return [self.transformer.to_model(r) for r in receipts]

    @transactional
    def add_receipt(self, tenant_id, receipt_model):
        """Records the receipt against the tenant and returns the stored receipt."""
        receipt = self.transformer.to_entity(receipt_model)
        if receipt.id is not None:
            raise InvalidState("receipt ids are assigned when the receipt is recorded")
        if receipt.creation_date is None:
            receipt.creation_date = self.clock.now()

        tenant = self.tenant_repository.find_by_id(tenant_id)
        posting = apply_receipt(tenant.ledger_snapshot(), receipt.amount)
        tenant.apply_ledger(posting.snapshot)
        tenant.attach_receipt(receipt)

        self.rent_receipt_repository.save(receipt)
        self.tenant_repository.save(tenant)
        logger.info(
            "Recorded receipt %s of %s for tenant %s: %d week(s) paid, credit %s, paid to %s",
            receipt.id, receipt.amount, tenant.id, posting.weeks_paid,
            tenant.current_rent_credit_amount, tenant.current_rent_paid_to_date,
        )
        return self.transformer.to_model(receipt)


def build_tenant_service(session, clock=None):
    return TenantService(
        TenantRepository(session),
        RentReceiptRepository(session),
        ModelEntityTransformer(),
        clock=clock,
    )
