from html import escape
from typing import Dict, Any
from .checker import ProbeResult
from .presenter import display_host


def render_site(site: ProbeResult) -> str:
    state = "up" if site.is_up else "down"
    code = f'<span class="status-code">{site.status_code}</span>' if site.status_code is not None else ""
    return f"""
        <a href="{escape(site.url)}" target="_blank" rel="noopener noreferrer" class="site-row {state}">
            <div class="site-main">
                <span class="status-dot {state}"></span>
                <span class="domain-name">{escape(display_host(site.url))}</span>
            </div>
            <div class="site-meta">
                <span class="status-pill pill-{state}">{state.upper()}</span>
                {code}
            </div>
        </a>"""


def render_group(group: Dict[str, Any]) -> str:
    rows = "".join(render_site(s) for s in group["up"])
    if group["down"]:
        rows += '\n        <div class="status-divider"></div>'
        rows += "".join(render_site(s) for s in group["down"])
    return f"""
    <div class="server-card" data-group="{escape(group['name'])}">
        <div class="server-header">
            <h2 class="server-title">{escape(group['title'])}</h2>
            <span class="server-stats">{group['summary']}</span>
        </div>
        <div class="sites-container">{rows}
        </div>
    </div>"""


def render_board(view: Dict[str, Any]) -> str:
    """Board fragment swapped into the page by the refresh/poll script."""
    checking = "true" if view["checking"] else "false"
    if view["groups"]:
        body = '<div class="servers-grid">' + "".join(render_group(g) for g in view["groups"]) + "\n</div>"
    elif view["checking"]:
        body = """<div class="loading-container">
    <div class="loading-spinner"></div>
    <p>Checking site statuses...</p>
</div>"""
    else:
        body = ""
    return f"""<div id="board" data-checking="{checking}">
<div class="header-footer"><span class="last-checked">{escape(view['last_checked'])}</span></div>
{body}
</div>"""


def render_page(view: Dict[str, Any]) -> str:
    return PAGE.replace("{{BOARD}}", render_board(view))


PAGE = """<!doctype html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <meta name="description" content="Real-time monitoring of server sites">
    <title>Site Monitor - Status Dashboard</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }

        body {
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
            background: #f0f2f5;
        }

        .container { min-height: 100vh; padding: 2rem; max-width: 1600px; margin: 0 auto; }

        .header {
            background: linear-gradient(90deg, #6a11cb 0%, #2575fc 100%);
            color: white;
            padding: 20px 30px;
            border-radius: 12px;
            display: flex;
            justify-content: space-between;
            align-items: center;
            margin-bottom: 0.5rem;
            box-shadow: 0 4px 20px rgba(37, 117, 252, 0.3);
        }

        .header-title { font-size: 1.75rem; font-weight: 700; }

        .refresh-button {
            display: flex;
            align-items: center;
            gap: 0.5rem;
            padding: 0.5rem 1.5rem;
            background: rgba(255, 255, 255, 0.2);
            color: white;
            border: 2px solid rgba(255, 255, 255, 0.3);
            border-radius: 8px;
            font-size: 0.95rem;
            font-weight: 600;
            cursor: pointer;
        }

        .refresh-button:disabled { opacity: 0.7; cursor: not-allowed; }

        .spinner {
            display: none;
            width: 14px;
            height: 14px;
            border: 2px solid white;
            border-radius: 50%;
            border-top-color: transparent;
            animation: spin 1s linear infinite;
        }

        .refresh-button.spinning .spinner { display: inline-block; }

        @keyframes spin { to { transform: rotate(360deg); } }

        .header-footer { padding: 0.75rem 0; margin-bottom: 1.5rem; }
        .last-checked { color: #718096; font-size: 0.9rem; font-weight: 500; }

        .loading-container {
            display: flex;
            flex-direction: column;
            align-items: center;
            padding: 4rem;
            background: white;
            border-radius: 16px;
        }

        .loading-spinner {
            width: 3rem;
            height: 3rem;
            border: 4px solid #e2e8f0;
            border-top-color: #2575fc;
            border-radius: 50%;
            animation: spin 1s linear infinite;
        }

        .servers-grid { display: grid; grid-template-columns: 1fr 1fr; gap: 2rem; }

        .server-card {
            background: white;
            box-shadow: 0 2px 10px rgba(0, 0, 0, 0.08);
            border-radius: 16px;
            padding: 1.5rem;
        }

        .server-header {
            display: flex;
            align-items: center;
            gap: 0.75rem;
            margin-bottom: 1.25rem;
            padding-bottom: 1rem;
            border-bottom: 2px solid #e2e8f0;
        }

        .server-title { font-size: 1.35rem; font-weight: 700; color: #1a202c; flex: 1; }

        .server-stats {
            font-size: 0.875rem;
            font-weight: 600;
            color: #48bb78;
            background: #f0f9f5;
            padding: 0.25rem 0.75rem;
            border-radius: 20px;
        }

        .sites-container { display: flex; flex-direction: column; gap: 0.75rem; }

        .status-divider {
            height: 2px;
            background: linear-gradient(90deg, transparent, #e2e8f0, transparent);
            margin: 1rem 0;
        }

        .site-row {
            display: flex;
            align-items: center;
            justify-content: space-between;
            padding: 1rem 1.25rem;
            background: #f7fafc;
            border-radius: 10px;
            text-decoration: none;
            border-left: 4px solid;
        }

        .site-row.up { border-left-color: #48bb78; }
        .site-row.down { border-left-color: #f56565; }
        .site-row:hover { background: #edf2f7; }

        .site-main { display: flex; align-items: center; gap: 0.75rem; flex: 1; }
        .status-dot { width: 12px; height: 12px; border-radius: 50%; }
        .status-dot.up { background: #48bb78; }
        .status-dot.down { background: #f56565; }
        .domain-name { font-size: 1rem; font-weight: 600; color: #1a202c; }

        .site-meta { display: flex; align-items: center; gap: 0.75rem; }

        .status-pill {
            padding: 0.375rem 0.875rem;
            border-radius: 20px;
            font-size: 0.75rem;
            font-weight: 700;
            letter-spacing: 0.5px;
        }

        .pill-up { background: #d4edda; color: #155724; }
        .pill-down { background: #f8d7da; color: #721c24; }

        .status-code {
            font-size: 0.75rem;
            color: #a0aec0;
            background: white;
            padding: 0.25rem 0.5rem;
            border-radius: 6px;
            font-weight: 600;
        }

        @media (max-width: 1200px) {
            .servers-grid { grid-template-columns: 1fr; }
        }

        @media (max-width: 768px) {
            .container { padding: 1rem; }
            .header { flex-direction: column; gap: 1rem; align-items: flex-start; }
            .site-row { flex-direction: column; align-items: flex-start; gap: 0.5rem; }
        }
    </style>
</head>
<body>
<main class="container">
    <header class="header">
        <h1 class="header-title">Site Monitor</h1>
        <button id="refreshBtn" class="refresh-button">
            <span class="spinner"></span>
            <span class="label">Refresh</span>
        </button>
    </header>

{{BOARD}}
</main>

<script>
    class SiteMonitor {
        constructor() {
            this.BOARD_ENDPOINT = '/board';
            this.REFRESH_ENDPOINT = '/refresh';
            this.POLL_INTERVAL = 15000; // redraw elapsed time and busy state
            this.pending = 0;

            document.getElementById('refreshBtn').addEventListener('click', () => this.refresh());
            this.syncButton();
            setInterval(() => this.poll(), this.POLL_INTERVAL);
        }

        replaceBoard(html) {
            document.getElementById('board').outerHTML = html;
            this.syncButton();
        }

        syncButton() {
            const board = document.getElementById('board');
            const busy = this.pending > 0 || board.dataset.checking === 'true';
            const btn = document.getElementById('refreshBtn');
            btn.disabled = busy;
            btn.classList.toggle('spinning', busy);
            btn.querySelector('.label').textContent = busy ? 'Checking...' : 'Refresh';
        }

        async poll() {
            try {
                const response = await fetch(this.BOARD_ENDPOINT, { cache: 'no-store' });
                if (!response.ok) throw new Error(`HTTP ${response.status}`);
                this.replaceBoard(await response.text());
            } catch (error) {
                console.error('Failed to load board:', error);
            }
        }

        async refresh() {
            this.pending += 1;
            this.syncButton();
            try {
                const response = await fetch(this.REFRESH_ENDPOINT, { method: 'POST', cache: 'no-store' });
                if (!response.ok) throw new Error(`HTTP ${response.status}`);
                this.replaceBoard(await response.text());
            } catch (error) {
                console.error('Failed to check status:', error);
            } finally {
                this.pending -= 1;
                this.syncButton();
            }
        }
    }

    document.addEventListener('DOMContentLoaded', () => {
        window.monitor = new SiteMonitor();
    });
</script>
</body>
</html>
"""
