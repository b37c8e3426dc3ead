"""HTML rendering of stored records."""

import html

import pandas as pd

from models import RECORD_COLUMNS, Record

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <style>
    body {{ font-family: sans-serif; margin: 2em; }}
    table.records {{ border-collapse: collapse; }}
    table.records th, table.records td {{ border: 1px solid #ccc; padding: 4px 8px; text-align: left; }}
    table.records th {{ background: #f0f0f0; }}
  </style>
</head>
<body>
  <h1>{title}</h1>
  <p>{summary}</p>
  {table}
</body>
</html>
"""


def records_frame(records: list[Record]) -> pd.DataFrame:
    return pd.DataFrame([r.model_dump() for r in records], columns=list(RECORD_COLUMNS))


def render_records(records: list[Record], origin: str = None, date: str = None) -> str:
    """Render records as an HTML page containing a single table."""
    filters = []
    if origin:
        filters.append(f"origin = {origin}")
    if date:
        filters.append(f"date = {date}")
    summary = f"{len(records)} record(s)"
    if filters:
        summary += " where " + " and ".join(filters)

    table = records_frame(records).to_html(
        index=False,
        escape=True,
        classes="records",
        border=0,
        na_rep="",
    )
    return PAGE_TEMPLATE.format(
        title="Received Data",
        summary=html.escape(summary),
        table=table,
    )
