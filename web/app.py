"""
Web surface for the Energy Prices Widget.

Provides REST API endpoints for the current price summary and chart.
"""
from flask import Flask, jsonify
from flask_cors import CORS
from flask_caching import Cache
from datetime import datetime
from zoneinfo import ZoneInfo

from energy_widget.config import TIMEZONE
from energy_widget.widget import STATUS_ERROR, STATUS_OK, analyze, refresh


# =============================================================================
# Flask Application Setup
# =============================================================================

app = Flask(__name__)
CORS(app)  # Enable CORS for API endpoints

# Using 'simple' in-memory cache (adequate with a single worker)
cache = Cache(app, config={'CACHE_TYPE': 'SimpleCache', 'CACHE_DEFAULT_TIMEOUT': 300})


def _now():
    return datetime.now(ZoneInfo(TIMEZONE))


def _sample_to_dict(sample):
    return {
        "from": sample.start.isoformat(),
        "till": sample.end.isoformat(),
        "price": sample.price,
    }


# =============================================================================
# API Endpoints
# =============================================================================

@app.route('/api/summary')
def api_summary():
    """Get the price summary for the coming hours.

    Returns: {status, title, min, max, prices: [...], cheapest_window: {...} | null}
    Price data itself is served through the price cache; no chart is rendered.
    """
    now = _now()
    result = analyze(now)

    if result.status == STATUS_ERROR:
        return jsonify({"status": result.status, "error": result.title}), 502

    body = {
        "timestamp": now.isoformat(),
        "status": result.status,
        "title": result.title,
    }

    if result.status == STATUS_OK:
        summary = result.summary
        window = summary.cheapest_window
        body.update({
            "min": summary.min_price,
            "max": summary.max_price,
            "baseline": summary.baseline,
            "prices": [_sample_to_dict(s) for s in summary.filtered_series],
            "cheapest_window": {
                "start_index": window.start_index,
                "length": window.length,
                "hours_offset": window.hours_offset,
                "starts_at": window.starts_at.isoformat(),
            } if window else None,
        })

    return jsonify(body)


@app.route('/api/chart.png')
@cache.cached(timeout=300, response_filter=lambda rv: rv[1] == 200)
def api_chart():
    """Get the rendered chart (cached for 5 minutes, errors are not cached)."""
    result = refresh(_now())
    status = 502 if result.status == STATUS_ERROR else 200
    return result.image, status, {'Content-Type': 'image/png'}


@app.route('/api/cache/clear', methods=['POST'])
def clear_cache():
    """Clear the API response cache."""
    cache.clear()
    return jsonify({"status": "success", "message": "Cache cleared"})


if __name__ == '__main__':
    from energy_widget.config import WEB_PORT
    app.run(host='0.0.0.0', port=WEB_PORT, debug=True)
