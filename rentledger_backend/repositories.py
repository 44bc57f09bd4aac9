"""SQLAlchemy-backed stores for tenants and rent receipts.

Database errors are re-raised as PersistenceFailure so callers only deal with
the ledger error hierarchy.
"""
from functools import wraps

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError

from .errors import ConcurrentUpdate, NotFound, PersistenceFailure
from .models import RentReceipt, Tenant


def translate_errors(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except StaleDataError as e:
            raise ConcurrentUpdate(str(e)) from e
        except SQLAlchemyError as e:
            raise PersistenceFailure(str(e)) from e
    return wrapper


class _Repository:
    model = None

    def __init__(self, session):
        self.session = session

    @translate_errors
    def save(self, entity):
        """Insert or update `entity` and flush; returns the managed instance."""
        if entity.id is not None and entity not in self.session:
            entity = self.session.merge(entity)
        else:
            self.session.add(entity)
        self.session.flush()
        return entity

    @translate_errors
    def find_optional(self, entity_id):
        if entity_id is None:
            return None
        return self.session.get(self.model, entity_id)

    def find_by_id(self, entity_id):
        entity = self.find_optional(entity_id)
        if entity is None:
            raise NotFound(f"{self.model.__name__} {entity_id} not found")
        return entity

    @translate_errors
    def find_all(self):
        return self.session.query(self.model).order_by(self.model.id).all()


class TenantRepository(_Repository):
    model = Tenant

    @translate_errors
    def find_distinct_by_receipt_date_range(self, start, end):
        """Tenants with at least one receipt created in [start, end]."""
        return (
            self.session.query(Tenant)
            .join(RentReceipt, RentReceipt.tenant_id == Tenant.id)
            .filter(RentReceipt.creation_date.between(start, end))
            .distinct()
            .order_by(Tenant.id)
            .all()
        )


class RentReceiptRepository(_Repository):
    model = RentReceipt

    @translate_errors
    def find_by_tenant(self, tenant_id):
        return (
            self.session.query(RentReceipt)
            .filter(RentReceipt.tenant_id == tenant_id)
            .order_by(RentReceipt.id)
            .all()
        )
