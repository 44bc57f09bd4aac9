"""Bulk import of tenants and rent receipts from CSV exports.

Receipts are posted through the tenant service, so imported history goes
through the same ledger accounting as live postings. Rows are imported in
file order; receipts for one tenant should be listed oldest first.
"""
import csv
import logging

from .errors import LedgerError
from .transformer import RentReceiptModel, TenantModel

logger = logging.getLogger(__name__)


def load_csv(path):
    with open(path, newline='', encoding='utf-8-sig') as f:
        reader = csv.DictReader(f)
        rows = list(reader)
    return rows


def _clean(row):
    return {k.strip(): (v.strip() if isinstance(v, str) else v) for k, v in row.items() if k}


def import_tenants(service, rows, dry):
    created = 0
    for r in rows:
        r = _clean(r)
        if not r.get('name'):
            continue
        model = TenantModel.from_dict(r)
        if not dry:
            service.save(model)
        created += 1
    return created


def import_rent_receipts(service, rows, dry):
    created = 0
    for r in rows:
        r = _clean(r)
        if not r.get('tenant_id') or not r.get('amount'):
            continue
        tenant_id = int(r.pop('tenant_id'))
        r.pop('id', None)
        model = RentReceiptModel.from_dict(r)
        if not dry:
            try:
                service.add_receipt(tenant_id, model)
            except LedgerError as e:
                logger.warning("Skipping receipt for tenant %s: %s", tenant_id, e.message)
                continue
        created += 1
    return created


FILES = {
    'tenants.csv': import_tenants,
    'rent_receipts.csv': import_rent_receipts,
}


def import_folder(service, folder, dry=False):
    """Import every known CSV found in `folder`; returns {file name: rows processed}."""
    counts = {}
    for name, fn in FILES.items():
        p = folder / name
        if not p.exists():
            logger.info("[%s] skipped (missing)", name)
            continue
        counts[name] = fn(service, load_csv(p), dry)
        logger.info("[%s] %d rows processed%s", name, counts[name], ' (dry-run)' if dry else '')
    return counts
