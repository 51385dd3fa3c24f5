"""Root landing page with API links."""


def render_root_page(app_name: str, version: str) -> str:
    """Return HTML for the root landing page."""
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{app_name}</title>
    <style>
        body {{
            font-family: system-ui, sans-serif;
            margin: 0;
            padding: 3rem 1rem;
            background: #0f172a;
            color: #e2e8f0;
        }}
        .wrap {{ max-width: 560px; margin: 0 auto; }}
        h1 {{ font-weight: 600; margin: 0 0 0.25rem 0; color: #fff; }}
        .version {{ color: #94a3b8; font-size: 0.9rem; }}
        ul {{ padding-left: 1.2rem; line-height: 1.8; }}
        a {{ color: #38bdf8; text-decoration: none; }}
        code {{ font-family: ui-monospace, monospace; color: #f8fafc; }}
    </style>
</head>
<body>
    <div class="wrap">
        <h1>{app_name}</h1>
        <div class="version">v{version} &middot; in-memory media library API</div>
        <ul>
            <li><a href="/docs">Interactive API docs</a></li>
            <li><a href="/redoc">ReDoc</a></li>
            <li><a href="/api/v1/health">Health</a></li>
        </ul>
        <p>Resources under <code>/api/v1</code>: folders, media, collections,
        tags, tag-categories, users, auth.</p>
    </div>
</body>
</html>
"""
