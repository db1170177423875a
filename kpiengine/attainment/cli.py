import json
import sys

from kpiengine.config.env import get_status_thresholds
from kpiengine.logging_config import configure_logging
from .aggregator import describe_method
from .engine import compute_attainment, series_from_payload
from .status import needs_attention

USAGE = "Usage: python -m kpiengine.attainment.cli <series.json | ->"


def _render(payload, name=None, thresholds=None):
    series = series_from_payload(payload, name=name)
    body = compute_attainment(series, thresholds).to_dict()
    body["method"] = describe_method(series.mode, series.polarity)
    return body


def run(payload):
    """Single series ({trendPolarity, aggregationMode, periods}) or a batch
    ({indicators: {name: series}}), rendered as the HTTP API would."""
    thresholds = get_status_thresholds()
    if isinstance(payload, dict) and "indicators" in payload:
        indicators = payload["indicators"]
        if not isinstance(indicators, dict):
            raise ValueError("indicators must be an object")
        results = {name: _render(s, name, thresholds) for name, s in indicators.items()}
        attention = needs_attention(((n, r["partial"]) for n, r in results.items()), thresholds)
        return {"results": results, "attention": attention}
    return _render(payload, thresholds=thresholds)


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        sys.exit(2)
    configure_logging()
    try:
        if args[0] == "-":
            payload = json.load(sys.stdin)
        else:
            with open(args[0], "r", encoding="utf-8") as f:
                payload = json.load(f)
        out = run(payload)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)
    print(json.dumps(out, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
