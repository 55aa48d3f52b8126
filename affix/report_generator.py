# affix/report_generator.py - exports for parsed .aff tables
# ---------------------------------------------------------------------------
# Every writer takes the list of scan results produced by aff_scanner.scan_file:
#   {"file", "encoding", "ok", "error", "commands": {CMD: [param, ...]}}
# ---------------------------------------------------------------------------

import csv
import datetime
import json
import logging
import os

import yaml
from jinja2 import Template

from affix.summary import merge_counts, summarize

logger = logging.getLogger(__name__)

CSV_FIELDS = ["file", "command", "index", "parameter"]

HTML_TEMPLATE = r"""
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8"/>
  <title>aff-scanner report</title>
  <style>
    body { background: #0b1220; color: #e2e8f0; font-family: Inter, Arial, sans-serif; margin: 0; padding: 28px; }
    h1 { color: #22d3ee; margin-bottom: 4px; }
    .meta { color: #94a3b8; font-size: 13px; }
    .card { background: rgba(15,25,50,0.7); border: 1px solid rgba(255,255,255,0.06); border-radius: 12px; padding: 16px; margin-top: 16px; }
    .failed { border-color: #ef4444; }
    table { border-collapse: collapse; width: 100%; margin-top: 8px; }
    td { padding: 4px 8px; border-top: 1px solid rgba(255,255,255,0.05); vertical-align: top; }
    td.cmd { color: #a78bfa; font-weight: 700; white-space: nowrap; }
    td.param { font-family: monospace; white-space: pre; }
    .badge { display: inline-block; padding: 2px 8px; border-radius: 999px; background: rgba(255,255,255,0.06); font-size: 12px; }
    .search { padding: 8px; border-radius: 8px; border: 1px solid rgba(255,255,255,0.1); background: transparent; color: inherit; width: 320px; }
  </style>
</head>
<body>
  <h1>aff-scanner report</h1>
  <div class="meta">Generated: {{ generated }} &bull; {{ file_count }} file(s) &bull; {{ failed_count }} failed &bull; {{ parameter_count }} parameter line(s)</div>
  <div class="meta">Top commands: {% for cmd, n in top %}{{ cmd|e }} ({{ n }}){% if not loop.last %}, {% endif %}{% endfor %}</div>

  <div class="card">
    <input id="searchBox" class="search" placeholder="Filter commands...">
  </div>

  {% for r in results %}
  <div class="card{% if not r.ok %} failed{% endif %}">
    <div><strong>{{ r.file|e }}</strong> <span class="badge">{{ r.encoding|e }}</span></div>
    {% if not r.ok %}
    <div class="meta">Read failed: {{ r.error|e }}</div>
    {% else %}
    <div class="meta">{{ r.stats.command_count }} command(s), {{ r.stats.parameter_count }} parameter line(s)</div>
    <table>
      {% for cmd, params in r.commands.items() %}
        {% if params %}
          {% for p in params %}
      <tr data-cmd="{{ cmd|lower|e }}"><td class="cmd">{{ cmd|e }}</td><td class="param">{{ p|e }}</td></tr>
          {% endfor %}
        {% else %}
      <tr data-cmd="{{ cmd|lower|e }}"><td class="cmd">{{ cmd|e }}</td><td class="param meta">(no parameters)</td></tr>
        {% endif %}
      {% endfor %}
    </table>
    {% endif %}
  </div>
  {% endfor %}

<script>
const results = {{ results_json|safe }};
document.getElementById('searchBox').addEventListener('input', function () {
  const q = this.value.toLowerCase();
  document.querySelectorAll('tr[data-cmd]').forEach(function (el) {
    el.style.display = (!q || el.dataset.cmd.includes(q)) ? '' : 'none';
  });
});
</script>
</body>
</html>
"""


def _ensure_dir(path):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)


def save_json(results, path):
    try:
        _ensure_dir(path)
        with open(path, "w", encoding="utf-8") as jf:
            json.dump(results, jf, indent=2, ensure_ascii=False)
        logger.info("JSON report: %s", path)
    except Exception:
        logger.exception("Failed to write JSON report")


def csv_rows(results):
    for r in results:
        if not r.get("ok"):
            continue
        for cmd, params in r["commands"].items():
            if not params:
                yield {"file": r["file"], "command": cmd, "index": "", "parameter": ""}
            for i, p in enumerate(params):
                yield {"file": r["file"], "command": cmd, "index": i, "parameter": p}


def save_csv(results, path):
    try:
        _ensure_dir(path)
        with open(path, "w", newline="", encoding="utf-8") as fh:
            w = csv.DictWriter(fh, fieldnames=CSV_FIELDS)
            w.writeheader()
            w.writerows(csv_rows(results))
        logger.info("CSV report: %s", path)
    except Exception:
        logger.exception("Failed to write CSV report")


def save_yaml(results, path):
    try:
        _ensure_dir(path)
        with open(path, "w", encoding="utf-8") as fh:
            yaml.safe_dump(results, fh, allow_unicode=True, sort_keys=False)
        logger.info("YAML report: %s", path)
    except Exception:
        logger.exception("Failed to write YAML report")


def generate_full_html(results, out_path):
    """Render the HTML report for a list of scan results."""
    generated = datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%d %H:%M:%SZ")
    totals = merge_counts(results)
    rendered = []
    for r in results:
        item = dict(r)
        item["stats"] = summarize(r.get("commands") or {})
        item["encoding"] = r.get("encoding") or "?"
        rendered.append(item)

    tpl = Template(HTML_TEMPLATE)
    out_html = tpl.render(
        generated=generated,
        results=rendered,
        results_json=json.dumps(results, ensure_ascii=False).replace("</", "<\\/"),
        file_count=len(results),
        failed_count=sum(1 for r in results if not r.get("ok")),
        parameter_count=sum(totals.values()),
        top=sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))[:10],
    )

    _ensure_dir(out_path)
    with open(out_path, "w", encoding="utf-8") as fh:
        fh.write(out_html)
    logger.info("HTML report: %s", out_path)
