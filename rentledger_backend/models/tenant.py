from decimal import Decimal

from ..extensions import db
from ..services.ledger import LedgerSnapshot


class Tenant(db.Model):
    __tablename__ = 'tenants'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)

    # Rent ledger
    weekly_rent_amount = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal('0'))
    current_rent_credit_amount = db.Column(db.Numeric(12, 2), nullable=False, default=Decimal('0'))
    current_rent_paid_to_date = db.Column(db.Date, nullable=False)

    # Metadata
    creation_date = db.Column(db.DateTime, nullable=False)
    version_id = db.Column(db.Integer, nullable=False)

    # Relationships
    rent_receipts = db.relationship('RentReceipt', lazy=True, order_by='RentReceipt.id')

    __mapper_args__ = {'version_id_col': version_id}

    def __repr__(self):
        return f'<Tenant {self.id}: {self.name}>'

    def ledger_snapshot(self):
        return LedgerSnapshot(
            weekly_rent_amount=Decimal(self.weekly_rent_amount or 0),
            current_rent_credit_amount=Decimal(self.current_rent_credit_amount or 0),
            current_rent_paid_to_date=self.current_rent_paid_to_date,
        )

    def apply_ledger(self, snapshot):
        """Copy the accounting fields of `snapshot` onto this tenant."""
        self.current_rent_credit_amount = snapshot.current_rent_credit_amount
        self.current_rent_paid_to_date = snapshot.current_rent_paid_to_date

    def attach_receipt(self, receipt):
        self.rent_receipts.append(receipt)
        receipt.tenant_id = self.id
        return receipt
