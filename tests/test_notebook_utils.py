import matplotlib

matplotlib.use("Agg")

import ipywidgets as widgets
import pytest

from bb84sim.notebook_utils import (
    bind_controls,
    build_controls,
    format_key_preview,
    key_summary,
    normalize_seed,
    render_qber_curve,
    run_bb84,
    security_badge,
    style_result_table,
    sweep_intercept_probability,
)


@pytest.mark.parametrize("raw, expected", [(None, None), ("", None), (" 42 ", 42), ("abc", None), (7, 7)])
def test_normalize_seed(raw, expected):
    assert normalize_seed(raw) == expected


def test_format_key_preview():
    assert format_key_preview("") == "-"
    assert format_key_preview("0101") == "0101"
    preview = format_key_preview("01" * 50, limit=20)
    assert len(preview) == 20
    assert "..." in preview


def test_run_bb84_clamps_widget_values():
    result = run_bb84(16, "5", True, 1.7, threshold=150.0)
    assert result.params.eve_intercept_prob == 1.0
    assert result.params.security_threshold == 100.0
    assert result.params.seed == 5
    assert len(result.events) == 16


def test_summary_and_badge_render():
    result = run_bb84(32, 3, True, 0.5)
    html = key_summary(result).data
    assert "QBER" in html
    assert "Eve intercepted" in html
    assert "threshold 11%" in security_badge(result)
    assert "background-color" in style_result_table(result).to_html()


def test_sweep_and_plot():
    data = sweep_intercept_probability(200, 9, values=[0.0, 0.5, 1.0])
    assert [item["value"] for item in data] == [0.0, 0.5, 1.0]
    assert data[0]["qber"] == 0.0
    assert data[2]["expected_qber"] == pytest.approx(37.5)

    fig = render_qber_curve(data)
    assert fig is not None
    assert render_qber_curve([]) is None


def test_bound_controls_rerun_on_change():
    calls = []
    controls = build_controls(num_photons=8)
    output = widgets.Output()

    bind_controls(controls, lambda **values: calls.append(values), output)
    controls["num_photons"].value = 20
    controls["eve"].value = True

    assert [call["num_photons"] for call in calls] == [8, 20, 20]
    assert calls[-1]["eve"] is True
    assert set(calls[0]) == {"num_photons", "seed_value", "eve", "eve_prob", "threshold"}


def test_controls_feed_run_bb84():
    values = {name: widget.value for name, widget in build_controls(num_photons=12, eve=True).items()}
    result = run_bb84(**values)

    assert len(result.events) == 12
    assert result.params.eve_present
    assert result.params.security_threshold == 11.0
