import pytest

from lab_inventory import create_app

INVENTORY_ROWS = [
    ['System Number', 'Item Type', 'Condition', 'Invoice Link'],
    ['SYS-01', 'Desktop', 'Working', 'https://drive.example/inv1.pdf'],
    ['SYS-02', 'Laptop', 'under repair', ''],
    ['SYS-03', 'Desktop', 'WORKING'],
]
REPAIR_ROWS = [
    ['System Number', 'Issue Description', 'Status'],
    ['SYS-02', 'No boot', 'Pending'],
    ['SYS-02', 'Fan noise', 'Completed'],
    ['SYS-01', 'Dead pixel', 'In progress'],
]
CONSUMABLE_ROWS = [
    ['Consumable Name', 'Date', 'Quantity', 'Unit', 'Notes'],
    ['Toner', '2024-01-02', 4, 'pcs', ''],
    ['Paper', '2024-01-03', '10', 'ream', ''],
]
ISSUED_ROWS = [
    ['Item ID', 'Item Name', 'Issued To', 'Quantity', 'Date', 'Remarks'],
    ['1', 'Toner', 'Lab 3', 1, '2024-02-01', ''],
]


class FakeGateway:
    """Stands in for SheetGateway; records every call."""

    def __init__(self, collections=None, reply='Saved'):
        self.collections = collections if collections is not None else {
            'getInventory': INVENTORY_ROWS,
            'getRepairs': REPAIR_ROWS,
            'getConsumables': CONSUMABLE_ROWS,
            'getIssued': ISSUED_ROWS,
        }
        self.reply = reply
        self.fetches = []
        self.commands = []

    def fetch_collection(self, action):
        self.fetches.append(action)
        return self.collections.get(action, [])

    def submit_command(self, payload):
        self.commands.append(payload)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def app(gateway):
    app = create_app({'TESTING': True, 'SECRET_KEY': 'test'}, gateway=gateway)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
