import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime

from . import gateway as gw
from .records import Consumable, InventoryItem, IssuedItem, Repair, normalize

log = logging.getLogger(__name__)

# dataset name -> (GET action, row type)
DATASETS = {
    'inventory': (gw.GET_INVENTORY, InventoryItem),
    'repairs': (gw.GET_REPAIRS, Repair),
    'consumables': (gw.GET_CONSUMABLES, Consumable),
    'issued': (gw.GET_ISSUED, IssuedItem),
}


@dataclass(frozen=True)
class Datasets:
    """One complete snapshot of the four collections."""
    inventory: tuple = ()
    repairs: tuple = ()
    consumables: tuple = ()
    issued: tuple = ()
    generation: int = 0
    loaded_at: datetime | None = field(default=None, compare=False)

    def get(self, name):
        if name not in DATASETS:
            raise KeyError(name)
        return getattr(self, name)


class DatasetStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._next_generation = 0
        self._current = Datasets()

    @property
    def current(self):
        return self._current

    def begin_reload(self):
        with self._lock:
            self._next_generation += 1
            return self._next_generation

    def commit(self, datasets):
        """Install ``datasets`` unless a newer reload has already landed."""
        with self._lock:
            if datasets.generation <= self._current.generation:
                log.info("dropping stale reload %d (current is %d)",
                         datasets.generation, self._current.generation)
                return False
            self._current = datasets
            return True

    def reload(self, gateway):
        """Fetch, normalize and commit all four collections; returns the committed snapshot."""
        generation = self.begin_reload()

        def load(name):
            action, row_type = DATASETS[name]
            return name, normalize(gateway.fetch_collection(action), row_type)

        with ThreadPoolExecutor(max_workers=len(DATASETS)) as pool:
            loaded = dict(pool.map(load, DATASETS))

        snapshot = Datasets(generation=generation, loaded_at=datetime.now(), **loaded)
        self.commit(snapshot)
        log.debug("reload %d: %s", generation,
                  ', '.join(f"{k}={len(v)}" for k, v in loaded.items()))
        return self._current
