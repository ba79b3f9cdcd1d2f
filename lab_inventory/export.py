"""CSV reports of the four datasets."""
import csv
import io

REPORT_FILES = {
    'inventory': 'inventory_report.csv',
    'repairs': 'repairs_report.csv',
    'consumables': 'consumables_report.csv',
    'issued': 'issued_report.csv',
}


def to_csv(records):
    """Header from the first record's keys; every data field double-quoted.

    Records are plain dicts or dataset rows. Columns missing from the
    first record are not written.
    """
    records = [r.as_dict() if hasattr(r, 'as_dict') else r for r in records]
    if not records:
        return ''
    headers = list(records[0].keys())
    output = io.StringIO()
    csv.writer(output, lineterminator='\n').writerow(headers)
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator='\n')
    for rec in records:
        writer.writerow(['' if rec.get(h) is None else str(rec.get(h)) for h in headers])
    return output.getvalue().rstrip('\n')
