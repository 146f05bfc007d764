import argparse
import json
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, send_file, abort
from flask import render_template_string


# ---------------------------------------------------------------------------
# HTML Template - hourly and monthly bar charts plus headline figures
# ---------------------------------------------------------------------------

HTML_TEMPLATE = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>Weblog Hourly Analysis</title>
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <script src="https://cdn.jsdelivr.net/npm/chart.js@4.4.4/dist/chart.umd.min.js"></script>
  <style>
    :root { --bg: #f8fafc; --bg2: #ffffff; --text: #1e293b; --muted: #64748b; --border: #e2e8f0; --accent: #3b82f6; }
    * { box-sizing: border-box; margin: 0; padding: 0; }
    body { font-family: 'Inter', 'Segoe UI', sans-serif; background: var(--bg); color: var(--text); padding: 24px 32px; }
    h1 { font-size: 24px; margin-bottom: 24px; }
    .grid { display: grid; gap: 20px; grid-template-columns: repeat(auto-fit, minmax(380px, 1fr)); margin-bottom: 20px; }
    .card { background: var(--bg2); border: 1px solid var(--border); border-radius: 16px; padding: 20px; }
    .card h3 { font-size: 16px; margin-bottom: 16px; }
    .kpis { display: grid; gap: 12px; grid-template-columns: repeat(auto-fit, minmax(160px, 1fr)); margin-bottom: 20px; }
    .kpi .label { font-size: 12px; color: var(--muted); text-transform: uppercase; }
    .kpi .value { font-size: 22px; font-weight: 700; margin-top: 4px; }
  </style>
</head>
<body>
  <h1>Weblog Hourly Analysis</h1>
  <div class="kpis" id="kpis"></div>
  <div class="grid">
    <div class="card"><h3>Accesses per hour</h3><canvas id="hours"></canvas></div>
    <div class="card"><h3>Accesses per month</h3><canvas id="months"></canvas></div>
  </div>
  <script>
    const KPIS = [
      ["Total accesses", "total_accesses"],
      ["Busiest hour", "busiest_hour"],
      ["Quietest hour", "quietest_hour"],
      ["Busiest two hours from", "busiest_two_hour"],
      ["Quietest two hours from", "quietest_two_hour"],
      ["Busiest day", "busiest_day"],
      ["Quietest day", "quietest_day"],
      ["Busiest month", "busiest_month"],
      ["Average / month", "average_accesses_per_month"],
    ];

    function bar(id, labels, data) {
      new Chart(document.getElementById(id), {
        type: "bar",
        data: { labels: labels, datasets: [{ data: data, backgroundColor: "#3b82f6" }] },
        options: { plugins: { legend: { display: false } } },
      });
    }

    async function load() {
      const summary = await (await fetch("/api/summary")).json();
      document.getElementById("kpis").innerHTML = KPIS.map(([label, key]) => {
        let value = summary[key];
        if (value === null) value = "none";
        if (typeof value === "number" && !Number.isInteger(value)) value = value.toFixed(2);
        return `<div class="card kpi"><div class="label">${label}</div><div class="value">${value}</div></div>`;
      }).join("");

      const hours = await (await fetch("/api/hours")).json();
      bar("hours", hours.hours, hours.counts);
      const months = await (await fetch("/api/months")).json();
      bar("months", months.months, months.counts);
    }

    load();
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Flask Application
# ---------------------------------------------------------------------------

def load_summary(summary_path: Path):
    if not summary_path.exists():
        abort(404, "Summary JSON not found; run log_analyzer --output first")
    with open(summary_path, "r", encoding="utf-8") as handle:
        return json.load(handle)


def create_app(summary_path: Path, plot_path: Optional[Path] = None):
    app = Flask(__name__)

    summary_cache = {"data": None, "mtime": 0}

    def get_summary():
        """Load summary with caching based on mtime."""
        if not summary_path.exists():
            abort(404, "Summary JSON not found; run log_analyzer --output first")
        mtime = summary_path.stat().st_mtime
        if summary_cache["data"] is None or mtime > summary_cache["mtime"]:
            summary_cache["data"] = load_summary(summary_path)
            summary_cache["mtime"] = mtime
        return summary_cache["data"]

    @app.get("/")
    def index():
        return render_template_string(HTML_TEMPLATE)

    @app.get("/api/summary")
    def summary():
        return jsonify(get_summary())

    @app.get("/api/hours")
    def hours():
        counts = get_summary().get("hour_histogram", [])
        return jsonify({"hours": list(range(len(counts))), "counts": counts})

    @app.get("/api/months")
    def months():
        summary = get_summary()
        counts = summary.get("month_histogram", [])
        return jsonify({
            "year": summary.get("period", {}).get("year"),
            "months": list(range(1, len(counts) + 1)),
            "counts": counts,
        })

    @app.get("/api/days")
    def days():
        summary = get_summary()
        counts = summary.get("day_histogram", [])
        return jsonify({
            "period": summary.get("period"),
            "days": list(range(1, len(counts) + 1)),
            "counts": counts,
        })

    if plot_path:
        @app.get("/plot")
        def plot():
            if not plot_path.exists():
                abort(404, "Plot not found")
            return send_file(plot_path.resolve())

    return app


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Weblog hourly analysis dashboard")
    parser.add_argument("--summary", default="reports/summary.json", help="Path to summary JSON")
    parser.add_argument("--plot", default=None, help="Optional path to plot image")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    summary_path = Path(args.summary)
    plot_path = Path(args.plot) if args.plot else None
    app = create_app(summary_path, plot_path)
    app.run(host=args.host, port=args.port, debug=False)


if __name__ == "__main__":
    main()
