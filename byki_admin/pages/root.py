"""Root landing page with API documentation links."""

from html import escape


def render_root_page(app_name: str, app_version: str) -> str:
    """Return HTML for the root landing page."""
    name = escape(app_name)
    version = escape(app_version)
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{name}</title>
    <style>
        * {{ box-sizing: border-box; }}
        body {{
            font-family: system-ui, sans-serif;
            margin: 0;
            min-height: 100vh;
            background: #0b0b0b;
            color: #e0e0e0;
            padding: 2rem 1rem;
        }}
        .wrap {{ max-width: 560px; margin: 0 auto; }}
        h1 {{ color: #fff; font-weight: 600; margin: 0 0 0.25rem 0; }}
        .tagline {{ color: #888; margin: 0 0 2rem 0; }}
        .card {{
            background: #131313;
            border: 1px solid #222;
            padding: 1.25rem 1.5rem;
            margin-bottom: 1rem;
        }}
        .card h2 {{
            font-size: 0.75rem;
            text-transform: uppercase;
            letter-spacing: 0.08em;
            color: #666;
            margin: 0 0 0.75rem 0;
        }}
        a {{ color: #f0b429; text-decoration: none; }}
        a:hover {{ text-decoration: underline; }}
        ul {{ margin: 0; padding-left: 1.1rem; }}
        li {{ margin: 0.35rem 0; }}
        code {{ font-family: ui-monospace, monospace; color: #bbb; }}
    </style>
</head>
<body>
    <div class="wrap">
        <h1>{name}</h1>
        <p class="tagline">BYKI operations dashboard API &middot; v{version}</p>
        <div class="card">
            <h2>Documentation</h2>
            <ul>
                <li><a href="/docs">Swagger UI</a></li>
                <li><a href="/redoc">ReDoc</a></li>
                <li><a href="/openapi.json">OpenAPI schema</a></li>
            </ul>
        </div>
        <div class="card">
            <h2>Getting started</h2>
            <ul>
                <li>Sign in with <code>POST /api/v1/auth/login</code></li>
                <li>Send the token as <code>Authorization: Bearer &lt;token&gt;</code></li>
                <li>Live emergencies: <code>/api/v1/ws/emergencies?token=&lt;token&gt;</code></li>
                <li>Health: <a href="/api/v1/health">/api/v1/health</a></li>
            </ul>
        </div>
    </div>
</body>
</html>
"""
