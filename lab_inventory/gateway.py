"""HTTP client for the spreadsheet-backed Apps Script endpoint.

GET  <endpoint>?action=<name>  -> JSON array of rows (row 0 = headers)
POST <endpoint>  {action, data|rows, invoice?}  -> plain-text status message
"""
import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request

from .errors import GatewayError

log = logging.getLogger(__name__)

# ── ACTIONS ───────────────────────────────────────────────────────────────────
GET_INVENTORY = 'getInventory'
GET_REPAIRS = 'getRepairs'
GET_CONSUMABLES = 'getConsumables'
GET_ISSUED = 'getIssued'

ADD_INVENTORY = 'addInventory'
BULK_INVENTORY = 'bulkInventory'
ADD_REPAIR = 'addRepair'
ADD_CONSUMABLE = 'addConsumable'
ISSUE_CONSUMABLE = 'issueConsumable'

READ_ACTIONS = (GET_INVENTORY, GET_REPAIRS, GET_CONSUMABLES, GET_ISSUED)
WRITE_ACTIONS = (ADD_INVENTORY, BULK_INVENTORY, ADD_REPAIR, ADD_CONSUMABLE, ISSUE_CONSUMABLE)


class SheetGateway:
    def __init__(self, endpoint, timeout=30):
        self.endpoint = endpoint
        self.timeout = timeout

    def _url(self, action):
        sep = '&' if '?' in self.endpoint else '?'
        return f"{self.endpoint}{sep}{urllib.parse.urlencode({'action': action})}"

    def fetch_collection(self, action):
        """Return the raw rows for ``action``; any failure degrades to []."""
        try:
            with urllib.request.urlopen(self._url(action), timeout=self.timeout) as resp:
                body = resp.read().decode('utf-8', errors='replace')
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
            log.warning("GET %s failed: %s", action, e)
            return []
        try:
            rows = json.loads(body)
        except json.JSONDecodeError:
            log.warning("GET %s returned unparseable body: %.200s", action, body)
            return []
        if not isinstance(rows, list):
            log.warning("GET %s returned %s, expected a list of rows", action, type(rows).__name__)
            return []
        return rows

    def submit_command(self, payload):
        """POST a command and return the response text verbatim."""
        body = json.dumps(payload).encode('utf-8')
        req = urllib.request.Request(self.endpoint, data=body, method='POST',
                                     headers={'Content-Type': 'application/json'})
        log.info("POST %s", payload.get('action'))
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                return resp.read().decode('utf-8', errors='replace')
        except urllib.error.HTTPError as e:
            # The backend's message is the only error signal; pass it through.
            text = e.read().decode('utf-8', errors='replace')
            log.warning("POST %s answered HTTP %s", payload.get('action'), e.code)
            return text
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            raise GatewayError(str(getattr(e, 'reason', e)) or type(e).__name__) from e
