import numpy as np
import pandas as pd
import pytest
from matplotlib.figure import Figure

from degviz.exceptions import ConfigError, EmptyInputError, SchemaError
from degviz.upset import (build_annotation_memberships, count_intersections,
                          draw_atac_upset, simplify_annotation, upset_y_limit)


@pytest.mark.parametrize(
    "annotation, expected",
    [
        ("Promoter (<=1kb)", "Promoter"),
        ("Intron (ENST00000381578.6/6535, intron 2 of 7)", "Intron"),
        ("Exon (ENST00000335137.4/79501, exon 1 of 1)", "Exon"),
        ("Distal Intergenic", "Distal Intergenic"),
        ("Downstream (1-2kb)", "Downstream"),
        ("3' UTR", "5' or 3' UTR"),
        ("5' UTR", "5' or 3' UTR"),
        ("Unknown feature", "Others"),
        (None, "Others"),
        (np.nan, "Others"),
    ],
)
def test_simplify_annotation(annotation, expected):
    assert simplify_annotation(annotation) == expected


def test_first_matching_rule_wins():
    assert simplify_annotation("Promoter overlapping Exon") == "Promoter"


def test_memberships_collapse_peaks_per_gene(annotation_table):
    memberships = build_annotation_memberships(annotation_table)
    lists = dict(zip(memberships["geneId"], memberships["annot_list"]))

    assert lists["g1"] == ["Promoter", "Intron"]
    assert lists["g2"] == ["Promoter"]
    assert lists["g3"] == ["Exon", "Distal Intergenic"]
    assert lists["g5"] == ["5' or 3' UTR", "Downstream"]
    assert len(memberships) == 5


def test_memberships_require_columns(annotation_table):
    with pytest.raises(SchemaError):
        build_annotation_memberships(annotation_table.drop(columns=["annotation"]))


def test_memberships_reject_empty_table():
    with pytest.raises(EmptyInputError):
        build_annotation_memberships(pd.DataFrame({"geneId": [], "annotation": []}))


def test_count_intersections_by_frequency():
    counts = count_intersections(
        [["Promoter"], ["Promoter"], ["Promoter", "Intron"], ["Exon"]], order_by="freq"
    )

    assert list(counts.index) == [("Promoter",), ("Intron", "Promoter"), ("Exon",)]
    assert counts.tolist() == [2, 1, 1]


def test_count_intersections_by_degree():
    counts = count_intersections(
        [["Intron", "Promoter"], ["Intron", "Promoter"], ["Exon"], ["Promoter"], ["Promoter"]],
        order_by="degree",
    )

    assert list(counts.index) == [("Promoter",), ("Exon",), ("Intron", "Promoter")]


def test_count_intersections_rejects_unknown_order():
    with pytest.raises(ConfigError):
        count_intersections([["Promoter"]], order_by="name")


def test_y_limit_leaves_headroom(annotation_table):
    counts = count_intersections(build_annotation_memberships(annotation_table))
    assert upset_y_limit(counts) == pytest.approx(2 * 1.2)


def test_draw_atac_upset_saves_png_and_pdf(annotation_table, tmp_path):
    save_dir = tmp_path / "out" / "upset"
    fig = draw_atac_upset(
        annotation_table, sample_name="sample1", save_dir=save_dir, dpi=50
    )

    assert isinstance(fig, Figure)
    assert (save_dir / "sample1_atac_ann.png").exists()
    assert (save_dir / "sample1_atac_ann.pdf").exists()
    assert fig._suptitle.get_text() == "Genomic Annotation Overlap: sample1"


def test_draw_atac_upset_without_saving(annotation_table, tmp_path):
    draw_atac_upset(
        annotation_table,
        upset_top_n=2,
        upset_order_by="degree",
        save_dir=tmp_path,
        save=False,
    )
    assert list(tmp_path.iterdir()) == []


def test_draw_atac_upset_sets_intersection_axis(annotation_table):
    fig = draw_atac_upset(annotation_table, save=False)
    bar_axes = [ax for ax in fig.axes if ax.get_ylabel() == "Number of Genes"]

    assert len(bar_axes) == 1
    assert bar_axes[0].get_ylim()[1] == pytest.approx(2.4)


def test_figure_renders_with_count_labels(annotation_table):
    fig = draw_atac_upset(annotation_table, bar_text_angle=45, save=False)
    fig.canvas.draw()

    bars = next(ax for ax in fig.axes if ax.get_ylabel() == "Number of Genes")
    labels = [text for text in bars.texts if text.get_text()]

    assert sorted(text.get_text() for text in labels) == ["1", "1", "1", "2"]
    assert all(text.get_rotation() == pytest.approx(45) for text in labels)


@pytest.mark.parametrize("top_n", [0, -3])
def test_top_n_below_one_raises_config_error(annotation_table, top_n):
    with pytest.raises(ConfigError):
        draw_atac_upset(annotation_table, upset_top_n=top_n, save=False)


def test_peaks_without_gene_are_dropped(annotation_table):
    extra = pd.DataFrame({"geneId": [None, np.nan], "annotation": ["Exon", "Intron"]})
    memberships = build_annotation_memberships(pd.concat([annotation_table, extra]))

    assert memberships["geneId"].tolist() == ["g1", "g2", "g3", "g4", "g5"]
