"""Turns view models from ``render`` into the HTML page."""
from __future__ import annotations

import json
from html import escape

from models import ChartMessage, ErrorView, GiftView, SelectorView
from render import COMMODITY, FALLBACK_CHART

CHART_JS_URL = "https://cdn.jsdelivr.net/npm/chart.js"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<script src="{chart_js}"></script>
</head>
<body>
<div id="content">
{body}
</div>
</body>
</html>
"""


def _chart_message_html(message: ChartMessage) -> str:
    parts = [f"<h3>{escape(message.title)}</h3>", f"<p>{escape(message.message)}</p>"]
    if message.sub_message:
        parts.append(f"<p>{escape(message.sub_message)}</p>")
    return '<div class="fallback-chart">' + "".join(parts) + "</div>"


def _chart_html(view: GiftView) -> str:
    if view.chart is None:
        message = view.chart_message or FALLBACK_CHART
        return f'<div class="chart-container">{_chart_message_html(message)}</div>'

    config = json.dumps(view.chart).replace("</", "<\\/")
    fallback = json.dumps(_chart_message_html(FALLBACK_CHART)).replace("</", "<\\/")
    return (
        '<div class="chart-container"><canvas id="priceChart"></canvas></div>\n'
        "<script>\n"
        "(function () {\n"
        '  var container = document.querySelector(".chart-container");\n'
        "  try {\n"
        '    if (typeof Chart === "undefined") { throw new Error("Chart.js unavailable"); }\n'
        f'    new Chart(document.getElementById("priceChart"), {config});\n'
        "  } catch (err) {\n"
        f"    container.innerHTML = {fallback};\n"
        "  }\n"
        "})();\n"
        "</script>"
    )


def _gift_html(view: GiftView) -> str:
    tooltip = "<br>".join(escape(line) for line in view.status.tooltip)
    status = (
        f'<div class="tooltip status-icon {view.status.level}">'
        f'<span class="tooltiptext">{tooltip}</span></div>'
    )
    intro = (
        f"Hello <strong>{escape(view.recipient_name)}</strong>,<br><br>"
        f"{escape(view.time_description)}, <strong>{escape(view.giver_name)}</strong> "
        f"gave you {escape(view.gift_description)}.<br><br>"
    )

    if view.total_value is None:
        notes = view.unavailable_notes or []
        first, rest = (notes[0], notes[1:]) if notes else ("", [])
        body = (
            f'<div class="message">{intro}<strong>{escape(first)}</strong><br>'
            + "<br>".join(escape(note) for note in rest)
            + "</div>"
        )
        return "\n".join([status, body, _chart_html(view)])

    price_class = "price last-known" if view.is_last_known else "price"
    return "\n".join(
        [
            status,
            f'<div class="message">{intro}{escape(view.price_label or "")} of that {COMMODITY.lower()}:</div>',
            f'<div class="{price_class}">{escape(view.total_value)}</div>',
            f'<div class="message">{escape(view.change_description or "")}<br>'
            f"<small>({COMMODITY} price: {escape(view.spot_price or '')})</small></div>",
            _chart_html(view),
        ]
    )


def _selector_html(view: SelectorView) -> str:
    options = "".join(
        f'<option value="{escape(option.recipient_id)}">{escape(option.recipient_name)}</option>'
        for option in view.options
    )
    return (
        '<div class="recipient-selector">'
        f"<h2>{escape(view.title)}</h2>"
        "<select onchange=\"if (this.value) { window.location.href = '?recipient=' + encodeURIComponent(this.value); }\">"
        '<option value="">Choose recipient...</option>'
        f"{options}</select></div>"
    )


def _error_html(view: ErrorView) -> str:
    return (
        '<div class="error">'
        f"<h3>{escape(view.title)}</h3>"
        f"<p>{escape(view.message)}</p>"
        '<button onclick="location.reload()">Try Again</button></div>'
    )


def render_html(view: GiftView | SelectorView | ErrorView) -> str:
    if isinstance(view, GiftView):
        body = _gift_html(view)
    elif isinstance(view, SelectorView):
        body = _selector_html(view)
    else:
        body = _error_html(view)
    return PAGE_TEMPLATE.format(title=f"{COMMODITY} Gift Tracker", chart_js=CHART_JS_URL, body=body)
