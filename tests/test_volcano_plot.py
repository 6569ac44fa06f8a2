import matplotlib.pyplot as plt
import numpy as np
import pytest
from matplotlib.figure import Figure

from degviz.exceptions import ConfigError, SchemaError
from degviz.volcano import (CATEGORY_ORDER, DEFAULT_PLOT_COLORS, draw_volcano,
                            validate_plot_colors)


def test_draw_volcano_returns_configured_figure(deg_table):
    fig = draw_volcano(deg_table, pval_cutoff=0.05, lfc_cutoff=1.0, exp_name="Treated")

    assert isinstance(fig, Figure)
    ax = fig.axes[0]
    assert ax.get_title() == "Treated Volcano Plot"
    assert "Treated" in ax.get_xlabel()

    x_min, x_max = ax.get_xlim()
    assert x_min == pytest.approx(-x_max)
    assert ax.get_ylim()[0] == 0

    legend_labels = [t.get_text() for t in ax.get_legend().get_texts()]
    assert legend_labels == CATEGORY_ORDER


def test_reference_lines_follow_cutoffs(deg_table):
    fig = draw_volcano(deg_table, pval_cutoff=0.01, lfc_cutoff=1.5)
    ax = fig.axes[0]

    hlines = [line.get_ydata()[0] for line in ax.lines if line.get_ydata()[0] == line.get_ydata()[1]]
    vlines = [line.get_xdata()[0] for line in ax.lines if line.get_xdata()[0] == line.get_xdata()[1]]

    assert hlines == pytest.approx([-np.log10(0.01)])
    assert sorted(vlines) == pytest.approx([-1.5, 1.5])


def test_top_genes_are_labelled(deg_table):
    fig = draw_volcano(deg_table, pval_cutoff=0.05, lfc_cutoff=1.0, label_n_top=1)
    labels = {t.get_text() for t in fig.axes[0].texts if t.get_text()}

    assert {"UP1", "DN1"} <= labels
    assert "UP2" not in labels


def test_y_limit_override(deg_table):
    fig = draw_volcano(deg_table, pval_cutoff=0.05, lfc_cutoff=1.0, y_limit=7)
    assert fig.axes[0].get_ylim()[1] == pytest.approx(7)


def test_draws_on_existing_axes(deg_table):
    fig, ax = plt.subplots()
    result = draw_volcano(deg_table, pval_cutoff=0.05, lfc_cutoff=1.0, ax=ax)
    assert result is fig


def test_writes_requested_formats(deg_table, tmp_path):
    target = tmp_path / "plots" / "treated_volcano.png"
    draw_volcano(
        deg_table,
        pval_cutoff=0.05,
        lfc_cutoff=1.0,
        output_path=target,
        formats=["png", "pdf"],
        dpi=50,
    )

    assert (tmp_path / "plots" / "treated_volcano.png").exists()
    assert (tmp_path / "plots" / "treated_volcano.pdf").exists()


def test_custom_colors_are_applied(deg_table):
    colors = {"Up-regulated": "#aa0000", "Down-regulated": "#0000aa", "Non-significant": "#999999"}
    fig = draw_volcano(deg_table, pval_cutoff=0.05, lfc_cutoff=1.0, plot_colors=colors)

    up_points = fig.axes[0].collections[0]
    assert up_points.get_facecolor()[0][:3] == pytest.approx([170 / 255, 0, 0])


@pytest.mark.parametrize(
    "colors",
    [
        {"Up-regulated": "red", "Down-regulated": "blue"},
        {**DEFAULT_PLOT_COLORS, "Other": "green"},
        ["red", "blue", "grey"],
    ],
)
def test_bad_color_mapping_raises_config_error(deg_table, colors):
    with pytest.raises(ConfigError):
        draw_volcano(deg_table, pval_cutoff=0.05, lfc_cutoff=1.0, plot_colors=colors)


def test_bad_colors_reported_before_schema(deg_table):
    with pytest.raises(ConfigError):
        draw_volcano(deg_table.drop(columns=["padj"]), 0.05, 1.0, plot_colors={})


def test_missing_columns_surface_schema_error(deg_table):
    with pytest.raises(SchemaError):
        draw_volcano(deg_table.drop(columns=["padj"]), pval_cutoff=0.05, lfc_cutoff=1.0)


def test_validate_plot_colors_returns_legend_order():
    shuffled = {
        "Non-significant": "#d3d3d3",
        "Up-regulated": "#ff3b30",
        "Down-regulated": "#56B4E9",
    }
    assert list(validate_plot_colors(shuffled)) == CATEGORY_ORDER
