"""Static dashboard page that polls the JSON endpoints with htmx."""

import html
from string import Template

_INDEX_TEMPLATE = Template(
    """<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>$title</title>
  <script src="https://unpkg.com/htmx.org@1.9.12"></script>
  <style>
    body { font-family: system-ui, -apple-system, Segoe UI, Roboto, Arial; margin: 2rem; }
    .card { max-width: 720px; padding: 1rem 1.5rem; border: 1px solid #e5e7eb; border-radius: 12px; margin-bottom: 1rem; }
    .btn { padding: .6rem 1rem; border-radius: 8px; border: 1px solid #d1d5db; cursor: pointer; background: #f9fafb; }
    .mono { font-family: ui-monospace, SFMono-Regular, Menlo, Consolas, monospace; }
    .row { display: flex; align-items: center; gap: .75rem; flex-wrap: wrap; }
    .badge { display: inline-block; padding: .25rem .6rem; border-radius: 999px; font-size: .85rem; border: 1px solid transparent; }
    .ok { background:#ecfdf5; color:#065f46; border-color:#a7f3d0; }
    .warn { background:#fffbeb; color:#92400e; border-color:#fde68a; }
    .down { background:#fef2f2; color:#991b1b; border-color:#fecaca; }
    small { color:#6b7280; }
  </style>
</head>
<body>
  <h1>$title ($chain_name)</h1>

  <div class="card">
    <p>Auto-refreshes every 15s from the configured node.</p>
    <div hx-get="/api/latest-block" hx-trigger="load, every 15s" hx-target="#out" hx-swap="innerHTML"></div>
    <button class="btn" hx-get="/api/latest-block" hx-target="#out" hx-swap="innerHTML">Get Latest Block</button>
    <pre id="out" class="mono" style="margin-top: 1rem;">(loading...)</pre>
    <small id="ts"></small>
  </div>

  <div class="card">
    <div class="row" style="justify-content: space-between;">
      <div class="row">
        <strong>Node Latency</strong>
        <span id="status-badge" class="badge down">checking...</span>
      </div>
      <button class="btn" hx-get="/api/node-latency" hx-target="#latency-json" hx-swap="innerHTML">Probe Now</button>
    </div>
    <div hx-get="/api/node-latency" hx-trigger="load, every 7s" hx-target="#latency-json" hx-swap="innerHTML"></div>
    <pre id="latency-json" class="mono" style="display:none;"></pre>
    <div class="mono" style="margin-top: .75rem;">
      p50: <span id="lat-p50">-</span> ms,
      p95: <span id="lat-p95">-</span> ms,
      ok: <span id="lat-ok">-</span>
    </div>
    <small id="lat-ts"></small>
  </div>

  <script>
    document.body.addEventListener('htmx:afterSwap', function (evt) {
      if (evt.target && evt.target.id === 'out') {
        document.getElementById('ts').textContent = 'Last updated: ' + new Date().toLocaleTimeString();
      }
    });

    document.body.addEventListener('htmx:afterOnLoad', function (evt) {
      const url = evt.detail.xhr.responseURL || '';
      if (!url.includes('/api/node-latency')) return;
      let data;
      try {
        data = JSON.parse(evt.detail.xhr.responseText);
      } catch (e) {
        return;
      }
      const fmt = (v) => (v === null || v === undefined) ? '-' : v.toFixed(1);
      const status = data.status || 'DOWN';

      document.getElementById('lat-p50').textContent = fmt(data.p50_ms);
      document.getElementById('lat-p95').textContent = fmt(data.p95_ms);
      document.getElementById('lat-ok').textContent = data.successes + '/' + data.samples;

      const badge = document.getElementById('status-badge');
      badge.classList.remove('ok', 'warn', 'down');
      badge.classList.add(status.toLowerCase());
      badge.textContent = status;

      document.getElementById('lat-ts').textContent = 'Last probe: ' + new Date().toLocaleTimeString();
    });
  </script>
</body>
</html>
"""
)


def render_index(title: str, chain_name: str) -> str:
    """Render the dashboard with escaped title and chain label."""

    return _INDEX_TEMPLATE.substitute(
        title=html.escape(title),
        chain_name=html.escape(chain_name),
    )
