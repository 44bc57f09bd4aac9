from ..extensions import db

from .tenant import Tenant
from .rent_receipt import RentReceipt

__all__ = ["db", "Tenant", "RentReceipt"]
