import json
from datetime import datetime
from functools import wraps

from flask import (Flask, Response, abort, current_app, flash, jsonify, make_response,
                   redirect, render_template_string, request, url_for)

from . import gateway as gw
from .charts import chart_payload, dashboard_cards
from .config import APP_NAME, APP_VERSION, DefaultConfig, configure_logging
from .errors import ConfigError, GatewayError, ValidationError
from .export import REPORT_FILES, to_csv
from .forms import build_command, encode_invoice, form_record, parse_bulk_csv, parse_issue
from .pages import DASHBOARD_HTML, SERVICE_WORKER_JS
from .records import Consumable, InventoryItem, IssuedItem, Repair
from .render import LINK_COLUMN, render_issue_options, render_table
from .store import DATASETS, DatasetStore

TABS = [
    ('dashboard', 'Dashboard'),
    ('inventory', 'Inventory'),
    ('repairs', 'Repairs'),
    ('consumables', 'Consumables'),
    ('issue', 'Issue'),
    ('reports', 'Reports'),
]
TAB_KEYS = {key for key, _ in TABS}


def create_app(overrides=None, gateway=None):
    app = Flask(__name__)
    app.config.from_object(DefaultConfig)
    app.config.from_prefixed_env('LAB_INVENTORY')
    if overrides:
        app.config.update(overrides)

    configure_logging(app.config['LOG_LEVEL'])

    if gateway is None:
        url = (app.config.get('SCRIPT_URL') or '').strip()
        if not url:
            raise ConfigError("SCRIPT_URL is not set (export LAB_INVENTORY_SCRIPT_URL=<Apps Script URL>)")
        gateway = gw.SheetGateway(url, timeout=app.config['GATEWAY_TIMEOUT'])

    app.extensions['lab_inventory'] = {'gateway': gateway, 'store': DatasetStore()}
    register_routes(app)
    return app


def _gateway():
    return current_app.extensions['lab_inventory']['gateway']


def _store():
    return current_app.extensions['lab_inventory']['store']


def reload_datasets():
    return _store().reload(_gateway())


def handle_submission_errors(tab):
    """Flash validation and transport failures, then send the user back to ``tab``."""
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ValidationError as e:
                flash(str(e))
            except GatewayError as e:
                current_app.logger.error("submission to %s failed: %s", f.__name__, e)
                flash(f"Request failed: {e}")
            return redirect(url_for('index', tab=tab))
        return decorated
    return decorator


def submit(payload, tab):
    """Send a command, show the backend's reply and go back to ``tab``.

    The redirected page load does the full reload.
    """
    reply = _gateway().submit_command(payload)
    flash(reply)
    return redirect(url_for('index', tab=tab))


def register_routes(app):

    @app.route('/')
    def index():
        tab = request.args.get('tab', 'dashboard')
        if tab not in TAB_KEYS:
            tab = 'dashboard'
        query = request.args.get('q', '').strip()
        data = reload_datasets()
        return render_template_string(
            DASHBOARD_HTML,
            app_name=APP_NAME,
            tabs=TABS,
            tab=tab,
            query=query,
            cards=dashboard_cards(data),
            charts=chart_payload(data),
            # global search applies to inventory and repairs only
            inventory_table=render_table(data.inventory, InventoryItem.COLUMNS, query),
            repairs_table=render_table(data.repairs, Repair.COLUMNS, query),
            consumables_table=render_table(data.consumables, Consumable.COLUMNS),
            issued_table=render_table(data.issued, IssuedItem.COLUMNS),
            issue_options=render_issue_options(data.consumables),
            inventory_fields=[c for c in InventoryItem.COLUMNS if c != LINK_COLUMN],
            repair_fields=[c for c in Repair.COLUMNS if c != LINK_COLUMN],
            consumable_fields=Consumable.COLUMNS,
            reports=list(REPORT_FILES.items()),
        )

    # ── SUBMISSIONS ───────────────────────────────────────────────────────────

    @app.route('/inventory', methods=['POST'])
    @handle_submission_errors('inventory')
    def add_inventory():
        invoice = encode_invoice(request.files.get('purchaseInvoice'))
        payload = build_command(gw.ADD_INVENTORY, data=form_record(request.form), invoice=invoice)
        return submit(payload, 'inventory')

    @app.route('/inventory/bulk', methods=['POST'])
    @handle_submission_errors('inventory')
    def bulk_inventory():
        rows = parse_bulk_csv(request.files.get('bulkFile'))
        return submit(build_command(gw.BULK_INVENTORY, rows=rows), 'inventory')

    @app.route('/repairs', methods=['POST'])
    @handle_submission_errors('repairs')
    def add_repair():
        invoice = encode_invoice(request.files.get('repairInvoice'))
        payload = build_command(gw.ADD_REPAIR, data=form_record(request.form), invoice=invoice)
        return submit(payload, 'repairs')

    @app.route('/consumables', methods=['POST'])
    @handle_submission_errors('consumables')
    def add_consumable():
        return submit(build_command(gw.ADD_CONSUMABLE, data=form_record(request.form)), 'consumables')

    @app.route('/issue', methods=['POST'])
    @handle_submission_errors('issue')
    def issue_consumable():
        return submit(build_command(gw.ISSUE_CONSUMABLE, data=parse_issue(request.form)), 'issue')

    # ── REPORTS ───────────────────────────────────────────────────────────────

    @app.route('/reports/<dataset>')
    def download_report(dataset):
        if dataset not in REPORT_FILES:
            abort(404)
        data = _store().current
        if data.generation == 0:
            data = reload_datasets()
        rows = data.get(dataset)
        if not rows:
            flash('No data')
            return redirect(url_for('index', tab='reports'))
        response = make_response(to_csv(rows))
        response.headers["Content-Disposition"] = f"attachment; filename={REPORT_FILES[dataset]}"
        response.headers["Content-type"] = "text/csv"
        return response

    @app.route('/api/datasets/<dataset>')
    def dataset_json(dataset):
        if dataset not in DATASETS:
            return jsonify({'error': 'Unknown dataset'}), 404
        data = _store().current
        if data.generation == 0:
            data = reload_datasets()
        return jsonify({
            'dataset': dataset,
            'generation': data.generation,
            'loaded_at': data.loaded_at.isoformat() if data.loaded_at else None,
            'records': [r.as_dict() for r in data.get(dataset)],
        })

    # ── PWA MANIFEST & SERVICE WORKER ─────────────────────────────────────────

    @app.route('/manifest.json')
    def manifest():
        return jsonify({
            "name": APP_NAME,
            "short_name": "Lab Inventory",
            "description": "Lab equipment inventory, repairs and consumables",
            "start_url": "/",
            "display": "standalone",
            "background_color": "#06070a",
            "theme_color": "#2b90ff",
        })

    @app.route('/sw.js')
    def service_worker():
        sw_code = SERVICE_WORKER_JS % {
            'cache_name': json.dumps(app.config['CACHE_NAME']),
            'assets': json.dumps(list(app.config['SHELL_ASSETS'])),
        }
        return Response(sw_code, mimetype='application/javascript')

    @app.route('/api/health')
    def health():
        return jsonify({'status': 'ok', 'version': APP_VERSION, 'time': datetime.now().isoformat()})
