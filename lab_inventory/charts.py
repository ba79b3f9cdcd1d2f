from collections import Counter


def condition_breakdown(inventory):
    """(working, under_repair) counts for the status pie."""
    working = sum(1 for item in inventory if item.is_working)
    return working, max(0, len(inventory) - working)


def repairs_by_system(repairs, limit=10):
    counts = Counter(r.system_number for r in repairs)
    # Counter.most_common keeps first-seen order between equal counts
    top = counts.most_common(limit)
    return top or [('None', 0)]


def dashboard_cards(datasets):
    working, _ = condition_breakdown(datasets.inventory)
    return {
        'total_systems': len(datasets.inventory),
        'working': working,
        'under_repair': sum(1 for r in datasets.repairs if r.is_open),
        'consumables': sum(c.quantity for c in datasets.consumables),
        'issued': len(datasets.issued),
    }


def chart_payload(datasets):
    working, under_repair = condition_breakdown(datasets.inventory)
    bars = repairs_by_system(datasets.repairs)
    return {
        'pie': {'labels': ['Working', 'Under Repair'], 'values': [working, under_repair]},
        'bar': {'labels': [name for name, _ in bars], 'values': [n for _, n in bars]},
    }
