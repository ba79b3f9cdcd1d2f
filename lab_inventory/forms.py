"""Turning submitted forms into gateway commands.

Every check here runs before the gateway is touched; a ValidationError
means nothing was sent.
"""
import base64
import csv
import io
import math

from .errors import ValidationError

PDF_MIMETYPE = 'application/pdf'

_NO_INVOICE = object()


def _has_file(file):
    return file is not None and bool(getattr(file, 'filename', ''))


def form_record(form, exclude=()):
    """Form fields -> plain dict, first value per field."""
    return {k: v for k, v in form.items() if k not in exclude}


def encode_invoice(file):
    """Base64-encode an attached PDF as {name, b64}; None when nothing was attached."""
    if not _has_file(file):
        return None
    if file.mimetype != PDF_MIMETYPE:
        raise ValidationError('Only PDF invoices allowed')
    data = file.read()
    return {'name': file.filename, 'b64': base64.b64encode(data).decode('ascii')}


def parse_bulk_csv(file):
    """Uploaded CSV -> list of dicts keyed by the header row.

    Blank lines are skipped; a line of bare separators still counts as a row.
    """
    if not _has_file(file):
        raise ValidationError('Select CSV or Excel file')
    if not file.filename.lower().endswith('.csv'):
        raise ValidationError('Please upload CSV. Excel support not included in this build.')
    text = file.read().decode('utf-8-sig', errors='replace')
    reader = csv.DictReader(io.StringIO(text), restval='')
    return [{k: v for k, v in row.items() if k is not None} for row in reader]


def parse_issue(form):
    data = form_record(form)
    try:
        qty = float(str(data.get('qty') or 0).strip() or 0)
    except ValueError:
        qty = 0
    if not (qty > 0 and math.isfinite(qty)):
        raise ValidationError('Invalid quantity')
    data['qty'] = int(qty) if qty.is_integer() else qty
    return data


def build_command(action, data=None, rows=None, invoice=_NO_INVOICE):
    payload = {'action': action}
    if rows is not None:
        payload['rows'] = rows
    else:
        payload['data'] = data or {}
    if invoice is not _NO_INVOICE:
        payload['invoice'] = invoice
    return payload
