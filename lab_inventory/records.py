"""Sheet rows -> keyed records -> typed domain rows."""
import logging

log = logging.getLogger(__name__)


def to_records(rows):
    """Pair the header row with every data row.

    Short rows are padded with '' and cells past the last header are
    dropped. Fewer than two rows means there is no data.
    """
    if not rows or len(rows) < 2:
        return []
    headers = [str(h).strip() for h in rows[0]]
    records = []
    for row in rows[1:]:
        if not isinstance(row, (list, tuple)):
            row = ()
        records.append({h: (row[j] if j < len(row) else '') for j, h in enumerate(headers)})
    return records


def _to_number(value):
    try:
        n = float(str(value).strip())
    except (TypeError, ValueError):
        return 0
    return int(n) if n.is_integer() else n


class Row:
    """One record of a dataset. All source columns are kept, typed ones are exposed as properties."""

    COLUMNS = ()

    __slots__ = ('fields',)

    def __init__(self, fields):
        self.fields = dict(fields)

    def get(self, column, default=''):
        value = self.fields.get(column)
        if value is None or value == '':
            value = self.fields.get(column.lower())
        if value is None or value == '':
            return default
        return value

    def first(self, *columns, default=''):
        for column in columns:
            value = self.fields.get(column)
            if value is not None and value != '':
                return value
        return default

    def matches(self, query):
        if not query:
            return True
        q = query.lower()
        return any(q in str(v).lower() for v in self.fields.values())

    def as_dict(self):
        return dict(self.fields)

    def __eq__(self, other):
        return type(self) is type(other) and self.fields == other.fields

    def __repr__(self):
        return f"{type(self).__name__}({self.fields!r})"


class InventoryItem(Row):
    COLUMNS = ('System Number', 'Item Type', 'Model', 'Serial Number', 'Processor', 'RAM',
               'Storage', 'Purchase Date', 'Location', 'Condition', 'Notes', 'Invoice Link')
    __slots__ = ()

    @property
    def system_number(self):
        return str(self.get('System Number'))

    @property
    def condition(self):
        return str(self.get('Condition'))

    @property
    def invoice_link(self):
        return str(self.get('Invoice Link'))

    @property
    def is_working(self):
        return 'work' in self.condition.lower()


class Repair(Row):
    COLUMNS = ('System Number', 'Repair Date', 'Issue Description', 'Parts Replaced',
               'Estimated Cost', 'Status', 'Repaired By', 'Actual Cost', 'Invoice Link')
    __slots__ = ()

    @property
    def system_number(self):
        return str(self.first('System Number', 'systemNumber', default='Unknown'))

    @property
    def status(self):
        return str(self.get('Status'))

    @property
    def is_open(self):
        return self.status.lower() != 'completed'

    @property
    def invoice_link(self):
        return str(self.get('Invoice Link'))


class Consumable(Row):
    COLUMNS = ('Consumable Name', 'Date', 'Quantity', 'Unit', 'Notes')
    __slots__ = ()

    @property
    def name(self):
        return str(self.first('Consumable Name', 'name'))

    @property
    def quantity(self):
        return _to_number(self.get('Quantity', 0))

    @property
    def unit(self):
        return str(self.get('Unit'))


class IssuedItem(Row):
    COLUMNS = ('Item ID', 'Item Name', 'Issued To', 'Quantity', 'Date', 'Remarks')
    __slots__ = ()

    @property
    def item_name(self):
        return str(self.get('Item Name'))

    @property
    def issued_to(self):
        return str(self.get('Issued To'))

    @property
    def quantity(self):
        return _to_number(self.get('Quantity', 0))


def normalize(rows, row_type):
    """Validate a raw payload and wrap its records as ``row_type``."""
    if not isinstance(rows, list) or not all(isinstance(r, (list, tuple)) for r in rows):
        log.warning("discarding malformed %s payload", row_type.__name__)
        return ()
    return tuple(row_type(rec) for rec in to_records(rows))
