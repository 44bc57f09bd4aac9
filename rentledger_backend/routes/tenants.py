# rentledger_backend/routes/tenants.py
from flask import Blueprint, current_app, jsonify, request

from ..errors import InvalidState
from ..transformer import RentReceiptModel, TenantModel

bp = Blueprint("tenants", __name__)


def _service():
    return current_app.extensions["tenant_service"]


def _payload():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidState("request body must be a JSON object")
    return data


def _hours_arg():
    raw = (request.args.get("paid_in_last_hours") or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidState("paid_in_last_hours must be an integer") from None


@bp.get("/tenants")
def list_tenants():
    tenants = _service().list_tenants(_hours_arg())
    return jsonify({"total": len(tenants), "tenants": [t.to_dict() for t in tenants]}), 200


@bp.post("/tenants")
def create_tenant():
    data = _payload()
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        return jsonify({"error": "invalid_payload", "message": "name is required"}), 400
    tenant = _service().save(TenantModel.from_dict(data))
    return jsonify(tenant.to_dict()), 201


@bp.get("/tenants/<int:tenant_id>")
def get_tenant(tenant_id):
    return jsonify(_service().get(tenant_id).to_dict()), 200


@bp.put("/tenants/<int:tenant_id>")
def update_tenant(tenant_id):
    service = _service()
    fields = service.get(tenant_id).to_dict()
    fields.update(_payload())
    # Receipts are only recorded through the rent-receipts endpoint
    fields.pop("rent_receipts", None)
    fields["id"] = tenant_id
    tenant = service.save(TenantModel.from_dict(fields))
    return jsonify(tenant.to_dict()), 200


@bp.get("/tenants/<int:tenant_id>/rent-receipts")
def list_rent_receipts(tenant_id):
    receipts = _service().list_receipts(tenant_id)
    return jsonify({"total": len(receipts), "rent_receipts": [r.to_dict() for r in receipts]}), 200


@bp.post("/tenants/<int:tenant_id>/rent-receipts")
def add_rent_receipt(tenant_id):
    data = _payload()
    if data.get("amount") is None:
        return jsonify({"error": "invalid_payload", "message": "amount is required"}), 400
    receipt = _service().add_receipt(tenant_id, RentReceiptModel.from_dict(data))
    return jsonify(receipt.to_dict()), 201
