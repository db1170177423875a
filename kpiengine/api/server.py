from __future__ import annotations
from typing import Any, Dict
from flask import Flask, request, jsonify

from kpiengine.api.cache import ResultCache, series_fingerprint
from kpiengine.attainment.aggregator import describe_method
from kpiengine.attainment.engine import compute_attainment, series_from_payload
from kpiengine.attainment.status import needs_attention
from kpiengine.config.env import StatusThresholds, get_api_config, get_cache_config, get_status_thresholds
from kpiengine.logging_config import configure_logging

import logging

logger = logging.getLogger(__name__)

app = Flask(__name__)

CACHE = ResultCache(get_cache_config().max_entries)

# Configuration helpers (overridable via app.config in tests)

def _get_api_key() -> str | None:
    if 'API_KEY' in app.config:
        return app.config.get('API_KEY')
    return get_api_config().api_key


def _get_thresholds() -> StatusThresholds:
    t = app.config.get('STATUS_THRESHOLDS')
    return t if isinstance(t, StatusThresholds) else get_status_thresholds()


def _check_api_key():
    api_key = _get_api_key()
    if api_key:
        provided = request.headers.get('X-API-Key')
        if provided != api_key:
            return jsonify({'error': 'unauthorized'}), 401
    return None


@app.before_request
def _auth():
    # Only enforce for computation routes; health stays open
    if request.path.startswith('/attainment'):
        return _check_api_key()
    return None


def _evaluate(payload: Any, name: str | None = None) -> Dict[str, Any]:
    """Compute (or fetch from cache) the rendered result of one series payload.
    Raises ValueError for payloads that break the call contract.
    """
    thresholds = _get_thresholds()
    key = series_fingerprint({'series': payload, 'thresholds': [thresholds.on_target, thresholds.attention]})
    cached = CACHE.get(key)
    if cached is not None:
        return cached
    series = series_from_payload(payload, name=name)
    body = compute_attainment(series, thresholds).to_dict()
    body['method'] = describe_method(series.mode, series.polarity)
    CACHE.put(key, body)
    return body


@app.get('/health')
def health():
    return jsonify({'status': 'ok', 'cache_entries': len(CACHE)})


@app.post('/attainment')
def post_attainment():
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        return jsonify({'error': 'series object is required'}), 400
    try:
        return jsonify(_evaluate(payload))
    except ValueError as e:
        logger.info('Rejected series: %s', e)
        return jsonify({'error': str(e)}), 400


@app.post('/attainment/batch')
def post_attainment_batch():
    payload = request.get_json(force=True, silent=True) or {}
    indicators = payload.get('indicators') if isinstance(payload, dict) else None
    if not isinstance(indicators, dict) or not indicators:
        return jsonify({'error': 'indicators is required'}), 400
    results: Dict[str, Any] = {}
    for name, series in indicators.items():
        try:
            results[name] = _evaluate(series, name=name)
        except ValueError as e:
            return jsonify({'error': f'{name}: {e}'}), 400
    attention = needs_attention(((n, r['partial']) for n, r in results.items()), _get_thresholds())
    return jsonify({'results': results, 'attention': attention})


if __name__ == '__main__':
    configure_logging()
    app.run(host='0.0.0.0', port=8000)
