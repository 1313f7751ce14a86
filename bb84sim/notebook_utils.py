"""Helpers for the interactive BB84 notebook.

Everything here only reads finished runs; nothing feeds back into the engine.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional

import numpy as np
import matplotlib.pyplot as plt
from IPython.display import HTML
import ipywidgets as widgets

from .analysis import DEFAULT_SECURITY_THRESHOLD
from .bb84_protocol import BB84Parameters, BB84Protocol, BB84RunResult
from .eavesdropper import expected_qber_percent
from .sifting import key_to_string


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    """Clamp a value between lower and upper bounds."""
    return max(lower, min(upper, value))


def normalize_seed(raw: Any) -> Optional[int]:
    """Turn a text box value into a seed, or None for a fresh random run."""
    if raw is None:
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def run_bb84(
    num_photons: int,
    seed_value: Any,
    eve: bool,
    eve_prob: float,
    threshold: float = DEFAULT_SECURITY_THRESHOLD,
) -> BB84RunResult:
    """Execute a BB84 run with values taken straight from the widgets."""
    params = BB84Parameters(
        num_photons=max(int(num_photons), 0),
        seed=normalize_seed(seed_value),
        eve_present=eve,
        eve_intercept_prob=clamp(eve_prob),
        security_threshold=clamp(threshold, 0.0, 100.0),
    )
    return BB84Protocol(params).run()


def style_result_table(result: BB84RunResult):
    """Colour each photon row by whether it was kept, and why it is wrong."""
    df = result.to_dataframe()

    def highlight(row):
        base = "#ffffff"
        if row["Kept"] == "Kept":
            base = "#edf7ed"
        if row["Error"] == "Yes":
            base = "#fdecea" if row["Eve"] != "-" else "#ede7f6"
        elif row["Eve"] != "-":
            base = "#fff4e5"
        return [f"background-color: {base}"] * len(row)

    styled = df.style.apply(highlight, axis=1).set_properties(**{"text-align": "center"})
    return styled.hide(axis="index")


def lerp_color(color_a: tuple, color_b: tuple, t: float) -> tuple:
    """Linear interpolation between two RGB colors."""
    return tuple(int((1 - t) * a + t * b) for a, b in zip(color_a, color_b))


def color_to_hex(color: tuple) -> str:
    """Convert RGB tuple to hex color string."""
    return f"#{color[0]:02x}{color[1]:02x}{color[2]:02x}"


def security_badge(result: BB84RunResult) -> str:
    report = result.report()
    # green at zero errors, red once QBER reaches twice the threshold
    limit = 2 * report.threshold_percent or 1.0
    color = lerp_color((67, 160, 71), (235, 87, 87), clamp(report.qber_percent / limit))
    label = "Secure channel" if report.is_secure else "Possible eavesdropping"
    return (
        f"<span style='display:inline-block;margin-right:8px;padding:6px 12px;border-radius:8px;"
        f"background:{color_to_hex(color)};color:#102a43;font-weight:600;'>"
        f"{label}: QBER {report.qber_percent:.2f}% (threshold {report.threshold_percent:g}%)</span>"
    )


def format_key_preview(key: str, limit: int = 64) -> str:
    """Format a key string with ellipsis if too long."""
    if not key:
        return "-"
    if len(key) <= limit:
        return key
    head = max(limit // 2, 1)
    tail = max(limit - head - 3, 0)
    if tail <= 0:
        return key[:limit]
    return key[:head] + "..." + key[-tail:]


def key_summary(result: BB84RunResult) -> HTML:
    report = result.report()
    lines = [
        "BB84 RESULT",
        "------------------------------------------",
        f"Photons        : {report.total_photons}",
        f"Matched bases  : {report.matched_photons} ({report.efficiency_percent:.0f}%)",
        f"QBER           : {report.qber_percent:.2f}%",
        f"Alice key      : {format_key_preview(key_to_string(result.secret_key()))}",
        f"Bob key        : {format_key_preview(key_to_string(result.sifted_bob_key()))}",
    ]
    if result.params.eve_present:
        lines.append(f"Eve intercepted: {report.intercepted_count} ({report.eve_induced_mismatch_count} wrong basis)")
    return HTML("<pre>" + "\n".join(lines) + "</pre>" + security_badge(result))


def sweep_intercept_probability(
    num_photons: int,
    seed_value: Any,
    values: Optional[Iterable[float]] = None,
) -> List[Dict[str, float]]:
    """Run once per interception probability and collect measured and expected QBER."""
    if values is None:
        values = np.linspace(0.0, 1.0, 11)
    seed = normalize_seed(seed_value)
    data = []
    for value in values:
        prob = clamp(float(value))
        result = run_bb84(num_photons, seed, True, prob)
        data.append({"value": prob, "qber": result.qber_percent(), "expected_qber": expected_qber_percent(prob)})
    return data


def render_qber_curve(data: List[Dict[str, float]], threshold: float = DEFAULT_SECURITY_THRESHOLD):
    """Plot measured QBER against interception probability with the security threshold."""
    if not data:
        return None
    values = [item["value"] for item in data]
    fig, ax = plt.subplots(figsize=(6, 3.5))
    ax.plot(values, [item["qber"] for item in data], marker="o", color="#1f77b4", label="Measured QBER")
    ax.plot(values, [item["expected_qber"] for item in data], linestyle="--", color="#2e7d32", label="Expected QBER")
    ax.axhline(threshold, color="#c62828", linewidth=1, label=f"Threshold ({threshold:g}%)")
    ax.set_xlabel("Interception probability")
    ax.set_ylabel("QBER (%)")
    ax.grid(alpha=0.25)
    ax.legend(loc="upper left")
    plt.tight_layout()
    return fig


def build_controls(num_photons: int = 16, eve: bool = False) -> Dict[str, widgets.Widget]:
    """Widgets whose names match the ``run_bb84`` keyword arguments."""
    return {
        "num_photons": widgets.IntSlider(value=num_photons, min=8, max=32, description="Photons"),
        "seed_value": widgets.Text(value="", description="Seed"),
        "eve": widgets.Checkbox(value=eve, description="Eve"),
        "eve_prob": widgets.FloatSlider(value=0.5, min=0.0, max=1.0, step=0.05, description="P(intercept)"),
        "threshold": widgets.FloatSlider(
            value=DEFAULT_SECURITY_THRESHOLD, min=0.0, max=30.0, step=0.5, description="Threshold %"
        ),
    }


def bind_controls(
    controls: Dict[str, widgets.Widget], callback: Callable, output: widgets.Output
) -> Callable:
    """Re-run ``callback`` with every widget's value whenever one of them changes."""

    def refresh(change=None):
        values = {name: widget.value for name, widget in controls.items()}
        with output:
            output.clear_output(wait=True)
            callback(**values)

    for widget in controls.values():
        widget.observe(refresh, names="value")
    refresh()
    return refresh
