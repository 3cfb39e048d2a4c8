"""
@file docs.py
@brief Landing page for the application root
@details
Serves a short HTML page pointing at the evacuation endpoints, the health
probes and the interactive OpenAPI docs.

@author EvacRoute Project
@date 2026-10-18
@version 1.0
@license AGPL-3.0
"""

## @brief Endpoints listed on the landing page (path, description)
ENDPOINTS = [
    ("GET /api/evac/route?start=lat,lon&end=lat,lon", "Safest route avoiding active flood zones"),
    ("GET /api/evac/network", "Road network as GeoJSON"),
    ("GET /api/evac/flood-zones", "Flood zones active now as GeoJSON"),
    ("GET /health", "Road data and cache status"),
    ("GET /api/docs", "Interactive OpenAPI documentation"),
]


def get_root_documentation() -> str:
    """
    @brief Generate the HTML content for the root page

    @return HTML string
    """
    items = "\n".join(
        f"                <li><code>{path}</code> - {description}</li>"
        for path, description in ENDPOINTS
    )
    return f"""<!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
        <title>EvacRoute API</title>
        <style>
            body {{
                font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
                max-width: 760px;
                margin: 40px auto;
                padding: 0 20px;
                color: #2d3436;
                line-height: 1.6;
            }}
            h1 {{ color: #0a6fb5; }}
            h2 {{ border-bottom: 2px solid #0a6fb5; padding-bottom: 6px; }}
            code {{ background: #f1f2f6; padding: 2px 6px; border-radius: 4px; }}
            .note {{ background: #fff3cd; border: 1px solid #ffeaa7; padding: 12px; border-radius: 6px; }}
        </style>
    </head>
    <body>
        <h1>EvacRoute API</h1>
        <p>Flood-aware evacuation routing over a road network graph.</p>

        <h2>Endpoints</h2>
        <ul>
{items}
        </ul>

        <h2>How routes are chosen</h2>
        <p>Road segments crossing an active flood zone are heavily penalized.
        A route only uses them when no dry path exists; the response then
        reports <code>allPathsHazardous: true</code>.</p>

        <p class="note"><strong>Notice:</strong> routes are advisory. Always
        follow instructions from local emergency services.</p>
    </body>
    </html>
    """
