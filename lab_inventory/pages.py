"""Inline page template and service worker source."""

SERVICE_WORKER_JS = """
const CACHE = %(cache_name)s;
const ASSETS = %(assets)s;

self.addEventListener('install', evt => {
  evt.waitUntil(caches.open(CACHE).then(c => c.addAll(ASSETS)));
  self.skipWaiting();
});
self.addEventListener('activate', evt => evt.waitUntil(self.clients.claim()));
self.addEventListener('fetch', evt => {
  evt.respondWith(caches.match(evt.request).then(r => r || fetch(evt.request)));
});
"""

DASHBOARD_HTML = r"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<meta name="theme-color" content="#2b90ff">
<link rel="manifest" href="{{ url_for('manifest') }}">
<title>{{ app_name }}</title>
<script src="https://cdnjs.cloudflare.com/ajax/libs/Chart.js/4.4.0/chart.umd.min.js"></script>
<style>
:root {
  --bg0:#06070a; --bg1:#0c0e13; --bg2:#13151d; --border:#1e2130;
  --blue:#2b90ff; --red:#ff6666; --green:#3cb371;
  --text0:#eef0f8; --text1:#8b92ab;
  --font:'IBM Plex Sans',sans-serif; --r8:8px;
}
*{margin:0;padding:0;box-sizing:border-box}
body{font-family:var(--font);background:var(--bg0);color:var(--text0);padding:20px}
header{display:flex;justify-content:space-between;align-items:center;margin-bottom:16px;gap:12px;flex-wrap:wrap}
header h1{font-size:20px;letter-spacing:1px}
.tabs{display:flex;gap:6px;flex-wrap:wrap;margin-bottom:16px}
.tab-btn{background:var(--bg2);color:var(--text1);border:1px solid var(--border);border-radius:var(--r8);padding:8px 14px;cursor:pointer}
.tab-btn.active{color:var(--text0);border-color:var(--blue)}
.view{display:none;opacity:0;transition:opacity .2s}
.view.active{display:block;opacity:1}
.cards{display:grid;grid-template-columns:repeat(auto-fit,minmax(150px,1fr));gap:12px;margin-bottom:16px}
.card{background:var(--bg2);border:1px solid var(--border);border-radius:var(--r8);padding:14px}
.card .label{font-size:11px;color:var(--text1);text-transform:uppercase;letter-spacing:1px}
.card .value{font-size:26px;font-weight:600;margin-top:4px}
.charts{display:grid;grid-template-columns:repeat(auto-fit,minmax(300px,1fr));gap:12px}
.panel{background:var(--bg1);border:1px solid var(--border);border-radius:var(--r8);padding:14px;margin-bottom:16px;overflow-x:auto}
.panel h2{font-size:14px;margin-bottom:10px;color:var(--text1);text-transform:uppercase;letter-spacing:1px}
.table{width:100%;border-collapse:collapse;font-size:12px}
.table th{background:var(--bg2);text-align:left;padding:6px 8px;font-size:11px;text-transform:uppercase}
.table td{padding:6px 8px;border-bottom:1px solid var(--border)}
.table a{color:var(--blue)}
form.grid{display:grid;grid-template-columns:repeat(auto-fit,minmax(180px,1fr));gap:8px;align-items:end}
label{font-size:11px;color:var(--text1);display:block}
input,select,textarea{width:100%;background:var(--bg2);color:var(--text0);border:1px solid var(--border);border-radius:4px;padding:6px}
button{background:var(--blue);color:#fff;border:0;border-radius:4px;padding:8px 14px;cursor:pointer}
.flash{background:var(--bg2);border-left:3px solid var(--blue);padding:10px 14px;margin-bottom:12px;white-space:pre-wrap}
.reports button{margin:4px}
</style>
</head>
<body>
<header>
  <h1>{{ app_name }}</h1>
  <form method="get" action="{{ url_for('index') }}">
    <input type="hidden" name="tab" value="{{ tab }}" id="searchTab">
    <input type="search" id="globalSearch" name="q" value="{{ query }}" placeholder="Search inventory &amp; repairs">
  </form>
</header>

{% with messages = get_flashed_messages() %}
{% for m in messages %}<div class="flash">{{ m }}</div>{% endfor %}
<script>const FLASHES = {{ messages|tojson }};</script>
{% endwith %}

<nav class="tabs">
{% for key, label in tabs %}
  <button class="tab-btn{% if key == tab %} active{% endif %}" data-tab="{{ key }}">{{ label }}</button>
{% endfor %}
</nav>

<section class="view{% if tab == 'dashboard' %} active{% endif %}" id="view-dashboard">
  <div class="cards">
    <div class="card"><div class="label">Total Systems</div><div class="value" id="card-total-systems">{{ cards.total_systems }}</div></div>
    <div class="card"><div class="label">Working</div><div class="value" id="card-working">{{ cards.working }}</div></div>
    <div class="card"><div class="label">Under Repair</div><div class="value" id="card-repair">{{ cards.under_repair }}</div></div>
    <div class="card"><div class="label">Consumables</div><div class="value" id="card-consumables">{{ cards.consumables }}</div></div>
    <div class="card"><div class="label">Issued</div><div class="value" id="card-issued">{{ cards.issued }}</div></div>
  </div>
  <div class="charts">
    <div class="panel"><h2>Working vs Under Repair</h2><canvas id="chart-pie"></canvas></div>
    <div class="panel"><h2>Repairs per System (Top 10)</h2><canvas id="chart-bar"></canvas></div>
  </div>
</section>

<section class="view{% if tab == 'inventory' %} active{% endif %}" id="view-inventory">
  <div class="panel">
    <h2>Add System</h2>
    <form class="grid" id="form-add-inventory" method="post" action="{{ url_for('add_inventory') }}" enctype="multipart/form-data">
      {% for col in inventory_fields %}<div><label>{{ col }}</label><input name="{{ col }}"></div>{% endfor %}
      <div><label>Purchase Invoice (PDF)</label><input type="file" id="purchaseInvoice" name="purchaseInvoice" accept="application/pdf"></div>
      <div><button type="submit">Add</button></div>
    </form>
  </div>
  <div class="panel">
    <h2>Bulk Upload</h2>
    <form class="grid" method="post" action="{{ url_for('bulk_inventory') }}" enctype="multipart/form-data">
      <div><label>CSV file</label><input type="file" id="bulkFileInput" name="bulkFile" accept=".csv,.xlsx,.xls"></div>
      <div><button type="submit" id="bulkUploadBtn">Upload</button></div>
    </form>
  </div>
  <div class="panel" id="inventoryTableWrap">{{ inventory_table }}</div>
</section>

<section class="view{% if tab == 'repairs' %} active{% endif %}" id="view-repairs">
  <div class="panel">
    <h2>Log Repair</h2>
    <form class="grid" id="form-add-repair" method="post" action="{{ url_for('add_repair') }}" enctype="multipart/form-data">
      {% for col in repair_fields %}<div><label>{{ col }}</label><input name="{{ col }}"></div>{% endfor %}
      <div><label>Repair Invoice (PDF)</label><input type="file" id="repairInvoice" name="repairInvoice" accept="application/pdf"></div>
      <div><button type="submit">Save</button></div>
    </form>
  </div>
  <div class="panel" id="repairsTableWrap">{{ repairs_table }}</div>
</section>

<section class="view{% if tab == 'consumables' %} active{% endif %}" id="view-consumables">
  <div class="panel">
    <h2>Add Consumable</h2>
    <form class="grid" id="form-add-consumable" method="post" action="{{ url_for('add_consumable') }}">
      {% for col in consumable_fields %}<div><label>{{ col }}</label><input name="{{ col }}"></div>{% endfor %}
      <div><button type="submit">Add</button></div>
    </form>
  </div>
  <div class="panel" id="consumableTableWrap">{{ consumables_table }}</div>
</section>

<section class="view{% if tab == 'issue' %} active{% endif %}" id="view-issue">
  <div class="panel">
    <h2>Issue Consumable</h2>
    <form class="grid" id="form-issue" method="post" action="{{ url_for('issue_consumable') }}">
      <div><label>Item</label><select id="issueSelectItem" name="item">{{ issue_options }}</select></div>
      <div><label>Quantity</label><input type="number" name="qty" min="1" step="any"></div>
      <div><label>Issued To</label><input name="issuedTo"></div>
      <div><label>Date</label><input type="date" name="date"></div>
      <div><label>Remarks</label><input name="remarks"></div>
      <div><button type="submit">Issue</button></div>
    </form>
  </div>
  <div class="panel" id="issuedTableWrap">{{ issued_table }}</div>
</section>

<section class="view{% if tab == 'reports' %} active{% endif %}" id="view-reports">
  <div class="panel reports">
    <h2>Download Reports</h2>
    {% for key, filename in reports %}
    <a href="{{ url_for('download_report', dataset=key) }}"><button type="button">{{ filename }}</button></a>
    {% endfor %}
  </div>
</section>

<script>
const CHARTS = {{ charts|tojson }};

document.querySelectorAll('.tab-btn').forEach(btn => {
  btn.addEventListener('click', () => {
    document.querySelector('.tab-btn.active')?.classList.remove('active');
    btn.classList.add('active');
    document.querySelectorAll('.view').forEach(v => v.classList.remove('active'));
    document.getElementById('view-' + btn.dataset.tab).classList.add('active');
    document.getElementById('searchTab').value = btn.dataset.tab;
    history.replaceState(null, '', '?tab=' + btn.dataset.tab);
  });
});

function drawCharts() {
  if (typeof Chart === 'undefined') return;
  new Chart(document.getElementById('chart-pie'), {
    type: 'doughnut',
    data: {labels: CHARTS.pie.labels, datasets: [{data: CHARTS.pie.values, backgroundColor: ['#2b90ff', '#ff6666']}]},
    options: {cutout: '40%', plugins: {legend: {position: 'bottom'}}}
  });
  new Chart(document.getElementById('chart-bar'), {
    type: 'bar',
    data: {labels: CHARTS.bar.labels, datasets: [{label: 'Repairs', data: CHARTS.bar.values, backgroundColor: '#3cb371'}]},
    options: {indexAxis: 'y', plugins: {legend: {display: false}},
              scales: {x: {title: {display: true, text: 'Repairs'}}, y: {title: {display: true, text: 'System'}}}}
  });
}

window.addEventListener('load', () => {
  drawCharts();
  FLASHES.forEach(m => alert(m));
  if ('serviceWorker' in navigator) navigator.serviceWorker.register('{{ url_for('service_worker') }}');
});
</script>
</body>
</html>"""
