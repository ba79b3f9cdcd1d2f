import io

import pytest

from lab_inventory import create_app
from lab_inventory.errors import ConfigError, GatewayError

from .conftest import FakeGateway


def flashes(client):
    with client.session_transaction() as sess:
        return [m for _, m in sess.get('_flashes', [])]


def test_create_app_requires_script_url(monkeypatch):
    monkeypatch.delenv('LAB_INVENTORY_SCRIPT_URL', raising=False)
    with pytest.raises(ConfigError):
        create_app({'SCRIPT_URL': '  '})


def test_create_app_builds_gateway_from_config():
    app = create_app({'SCRIPT_URL': 'https://script.example/exec', 'GATEWAY_TIMEOUT': 5})
    gateway = app.extensions['lab_inventory']['gateway']
    assert (gateway.endpoint, gateway.timeout) == ('https://script.example/exec', 5)


def test_index_reloads_and_renders_everything(client, gateway):
    resp = client.get('/')
    assert resp.status_code == 200
    assert len(gateway.fetches) == 4
    html = resp.get_data(as_text=True)
    assert 'id="card-total-systems">3<' in html
    assert 'id="card-working">2<' in html
    assert 'id="card-repair">2<' in html
    assert 'id="card-consumables">14<' in html
    assert 'SYS-03' in html
    assert '<a href="https://drive.example/inv1.pdf" target="_blank" rel="noopener">Invoice</a>' in html
    assert '<option value="Toner">Toner (available: 4)</option>' in html


def test_index_search_filters_inventory_and_repairs_only(client):
    html = client.get('/?tab=inventory&q=laptop').get_data(as_text=True)
    inventory = html.split('id="inventoryTableWrap">')[1].split('</div>')[0]
    assert 'SYS-02' in inventory and 'SYS-01' not in inventory
    consumables = html.split('id="consumableTableWrap">')[1].split('</div>')[0]
    assert 'Toner' in consumables and 'Paper' in consumables


def test_index_with_unreachable_backend_shows_zeros(app):
    app.extensions['lab_inventory']['gateway'] = FakeGateway(collections={})
    html = app.test_client().get('/').get_data(as_text=True)
    assert 'id="card-total-systems">0<' in html


def test_add_consumable_submits_and_redirects(client, gateway):
    resp = client.post('/consumables', data={'Consumable Name': 'Toner', 'Quantity': '5'})
    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/?tab=consumables')
    assert gateway.commands == [{'action': 'addConsumable', 'data': {'Consumable Name': 'Toner', 'Quantity': '5'}}]
    assert flashes(client) == ['Saved']


def test_submission_reloads_every_collection_once(client, gateway):
    resp = client.post('/consumables', data={'Consumable Name': 'Toner'}, follow_redirects=True)
    assert resp.status_code == 200
    assert sorted(gateway.fetches) == ['getConsumables', 'getInventory', 'getIssued', 'getRepairs']
    assert 'Saved' in resp.get_data(as_text=True)


def test_add_inventory_with_pdf_invoice(client, gateway):
    data = {'System Number': 'SYS-9',
            'purchaseInvoice': (io.BytesIO(b'%PDF'), 'inv.pdf', 'application/pdf')}
    client.post('/inventory', data=data, content_type='multipart/form-data')
    (payload,) = gateway.commands
    assert payload['action'] == 'addInventory'
    assert payload['data'] == {'System Number': 'SYS-9'}
    assert payload['invoice'] == {'name': 'inv.pdf', 'b64': 'JVBERg=='}


def test_add_repair_without_invoice_sends_null(client, gateway):
    client.post('/repairs', data={'System Number': 'SYS-1', 'Status': 'Pending'})
    assert gateway.commands[0]['invoice'] is None


@pytest.mark.parametrize("url,field", [('/inventory', 'purchaseInvoice'), ('/repairs', 'repairInvoice')])
def test_non_pdf_invoice_aborts_before_any_network_call(client, gateway, url, field):
    data = {'System Number': 'SYS-9', field: (io.BytesIO(b'png'), 'inv.png', 'image/png')}
    resp = client.post(url, data=data, content_type='multipart/form-data')
    assert resp.status_code == 302
    assert gateway.commands == [] and gateway.fetches == []
    assert flashes(client) == ['Only PDF invoices allowed']


@pytest.mark.parametrize("qty", ['0', '-1'])
def test_issue_with_non_positive_quantity_is_rejected(client, gateway, qty):
    client.post('/issue', data={'item': 'Toner', 'qty': qty})
    assert gateway.commands == [] and gateway.fetches == []
    assert flashes(client) == ['Invalid quantity']


def test_issue_sends_numeric_quantity(client, gateway):
    client.post('/issue', data={'item': 'Toner', 'qty': '2', 'issuedTo': 'Lab 3'})
    assert gateway.commands == [{'action': 'issueConsumable',
                                 'data': {'item': 'Toner', 'qty': 2, 'issuedTo': 'Lab 3'}}]


def test_bulk_upload_csv(client, gateway):
    data = {'bulkFile': (io.BytesIO(b'System Number,Model\nS1,X1\n\nS2,X2\n'), 'systems.csv', 'text/csv')}
    client.post('/inventory/bulk', data=data, content_type='multipart/form-data')
    assert gateway.commands == [{'action': 'bulkInventory', 'rows': [
        {'System Number': 'S1', 'Model': 'X1'}, {'System Number': 'S2', 'Model': 'X2'}]}]


def test_bulk_upload_rejects_excel(client, gateway):
    data = {'bulkFile': (io.BytesIO(b'PK'), 'systems.xlsx', 'application/octet-stream')}
    client.post('/inventory/bulk', data=data, content_type='multipart/form-data')
    assert gateway.commands == []
    assert flashes(client) == ['Please upload CSV. Excel support not included in this build.']


def test_bulk_upload_without_file(client, gateway):
    client.post('/inventory/bulk', data={})
    assert gateway.commands == []
    assert flashes(client) == ['Select CSV or Excel file']


def test_gateway_failure_is_flashed(client, gateway):
    gateway.reply = GatewayError('connection refused')
    resp = client.post('/consumables', data={'Consumable Name': 'Toner'})
    assert resp.status_code == 302
    assert flashes(client) == ['Request failed: connection refused']
    assert gateway.fetches == []


def test_download_report(client):
    client.get('/')
    resp = client.get('/reports/repairs')
    assert resp.status_code == 200
    assert resp.headers['Content-Disposition'] == 'attachment; filename=repairs_report.csv'
    assert resp.mimetype == 'text/csv'
    lines = resp.get_data(as_text=True).split('\n')
    assert lines[0] == 'System Number,Issue Description,Status'
    assert lines[1] == '"SYS-02","No boot","Pending"'


def test_download_report_loads_data_when_store_is_empty(client, gateway):
    resp = client.get('/reports/issued')
    assert resp.status_code == 200
    assert len(gateway.fetches) == 4


def test_download_empty_report_flashes_no_data(app):
    app.extensions['lab_inventory']['gateway'] = FakeGateway(collections={})
    client = app.test_client()
    resp = client.get('/reports/inventory')
    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/?tab=reports')
    assert flashes(client) == ['No data']


def test_download_unknown_report(client):
    assert client.get('/reports/users').status_code == 404


def test_dataset_json(client):
    client.get('/')
    body = client.get('/api/datasets/issued').get_json()
    assert body['generation'] == 1
    assert body['records'] == [{'Item ID': '1', 'Item Name': 'Toner', 'Issued To': 'Lab 3',
                                'Quantity': 1, 'Date': '2024-02-01', 'Remarks': ''}]
    assert client.get('/api/datasets/users').status_code == 404


def test_dataset_json_loads_when_nothing_loaded_yet(client, gateway):
    body = client.get('/api/datasets/inventory').get_json()
    assert len(gateway.fetches) == 4
    assert body['generation'] == 1
    assert [r['System Number'] for r in body['records']] == ['SYS-01', 'SYS-02', 'SYS-03']


def test_service_worker_is_cache_first_with_versioned_key(client, app):
    resp = client.get('/sw.js')
    assert resp.mimetype == 'application/javascript'
    js = resp.get_data(as_text=True)
    assert f'const CACHE = "{app.config["CACHE_NAME"]}";' in js
    assert 'const ASSETS = ["/", "/manifest.json", "/sw.js"];' in js
    assert 'caches.match(evt.request).then(r => r || fetch(evt.request))' in js


def test_manifest_and_health(client):
    assert client.get('/manifest.json').get_json()['start_url'] == '/'
    assert client.get('/api/health').get_json()['status'] == 'ok'
