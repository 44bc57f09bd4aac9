from ..extensions import db


class RentReceipt(db.Model):
    __tablename__ = 'rent_receipts'

    id = db.Column(db.Integer, primary_key=True)
    tenant_id = db.Column(db.Integer, db.ForeignKey('tenants.id'), nullable=False, index=True)

    amount = db.Column(db.Numeric(10, 2), nullable=False)
    creation_date = db.Column(db.DateTime, nullable=False, index=True)

    def __repr__(self):
        return f'<RentReceipt {self.id}: Tenant {self.tenant_id}, ${self.amount}>'
