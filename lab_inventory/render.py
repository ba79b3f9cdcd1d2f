"""HTML fragments for the dashboard tables.

Everything coming from the sheet is escaped. The invoice URL is trusted as
a link target (the backend produces it from its own upload) and is only
attribute-escaped.
"""
from markupsafe import Markup, escape

LINK_COLUMN = 'Invoice Link'


def filter_rows(rows, query=''):
    if not query:
        return list(rows)
    return [r for r in rows if r.matches(query)]


def _cell(row, header, link_column):
    value = row.get(header)
    if header == link_column and value:
        return f'<td><a href="{escape(value)}" target="_blank" rel="noopener">Invoice</a></td>'
    return f'<td>{escape(value)}</td>'


def render_table(rows, headers, query='', link_column=LINK_COLUMN):
    head = ''.join(f'<th>{escape(h)}</th>' for h in headers)
    body = ''.join(
        '<tr>' + ''.join(_cell(r, h, link_column) for h in headers) + '</tr>'
        for r in filter_rows(rows, query)
    )
    return Markup(f'<table class="table"><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>')


def render_issue_options(consumables):
    return Markup(''.join(
        f'<option value="{escape(c.name)}">{escape(c.name)} (available: {escape(c.quantity)})</option>'
        for c in consumables
    ))
