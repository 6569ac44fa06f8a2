import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def deg_table():
    """Small DESeq2-style results table with a clear up/down split"""
    rng = np.random.default_rng(7)
    n_background = 60
    background = pd.DataFrame(
        {
            "Symbol": [f"BG{i}" for i in range(n_background)],
            "log2FoldChange": rng.normal(0, 0.4, n_background),
            "pvalue": rng.uniform(0.05, 1, n_background),
            "padj": rng.uniform(0.1, 1, n_background),
        }
    )
    hits = pd.DataFrame(
        {
            "Symbol": ["UP1", "UP2", "UP3", "DN1", "DN2"],
            "log2FoldChange": [3.2, 2.5, 1.8, -2.9, -4.1],
            "pvalue": [1e-12, 1e-8, 1e-5, 1e-9, 1e-6],
            "padj": [1e-10, 1e-6, 1e-3, 1e-7, 1e-4],
        }
    )
    return pd.concat([hits, background], ignore_index=True)


@pytest.fixture
def annotation_table():
    """ChIPseeker annotatePeak-style table"""
    return pd.DataFrame(
        {
            "geneId": ["g1", "g1", "g1", "g2", "g3", "g3", "g4", "g5", "g5"],
            "annotation": [
                "Promoter (<=1kb)",
                "Promoter (1-2kb)",
                "Intron (ENST00000381578.6/6535, intron 2 of 7)",
                "Promoter (<=1kb)",
                "Exon (ENST00000335137.4/79501, exon 1 of 1)",
                "Distal Intergenic",
                "Promoter (2-3kb)",
                "3' UTR",
                "Downstream (<1kb)",
            ],
        }
    )
