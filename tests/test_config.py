import json

import pytest
import yaml

from degviz.config import (Config, get_default_config, load_config, save_config,
                           validate_config)
from degviz.exceptions import ConfigError


def test_default_config_is_valid():
    config = get_default_config()

    assert config.volcano["pval_cutoff"] == 0.05
    assert config.volcano["axis_scaling"]["default_y_limit"] == 10.0
    assert config.venn["legend_order"] == ["D", "C", "B", "A"]
    assert config.upset["upset_top_n"] == 20
    assert config.output["formats"] == ["png", "pdf"]
    assert validate_config(config) == []


def test_partial_sections_keep_defaults():
    config = Config(volcano={"lfc_cutoff": 2.0}, upset={"dpi": 150})

    assert config.volcano["lfc_cutoff"] == 2.0
    assert config.volcano["pval_cutoff"] == 0.05
    assert config.upset["dpi"] == 150
    assert config.upset["fill_color"] == "#56B4E9"


def test_default_colours_are_not_shared():
    first = Config()
    first.volcano["plot_colors"]["Up-regulated"] = "black"
    assert Config().volcano["plot_colors"]["Up-regulated"] == "#ff3b30"


@pytest.mark.parametrize("suffix", [".yaml", ".json"])
def test_save_and_load(tmp_path, suffix):
    path = tmp_path / "nested" / f"config{suffix}"
    config = Config(project_name="roots", volcano={"label_n_top": 5})

    save_config(config, path)
    loaded = load_config(path)

    assert loaded.project_name == "roots"
    assert loaded.volcano["label_n_top"] == 5
    assert loaded.to_dict() == config.to_dict()


def test_saved_yaml_is_readable(tmp_path):
    path = tmp_path / "config.yml"
    save_config(get_default_config(), path)

    with open(path) as f:
        raw = yaml.safe_load(f)
    assert raw["project_name"] == "degviz_plots"
    assert list(raw) == ["project_name", "output_dir", "volcano", "venn", "upset", "output"]


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_load_unsupported_suffix(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("project_name = 'x'\n")
    with pytest.raises(ValueError):
        load_config(path)


def test_load_rejects_unknown_keys(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"heatmap": {}}))
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_rejects_non_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError):
        load_config(path)


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path).to_dict() == get_default_config().to_dict()


def test_validate_config_reports_issues():
    config = Config(
        volcano={"pval_cutoff": 0, "plot_colors": {"Up-regulated": "red"}},
        venn={"legend_order": ["A", "B", "C", "X"]},
        upset={"upset_order_by": "name", "upset_top_n": 0},
        output={"dpi": -1},
    )

    issues = validate_config(config)

    assert "volcano.pval_cutoff must be a positive number" in issues
    assert any(issue.startswith("volcano.plot_colors") for issue in issues)
    assert "venn.legend_order must be a permutation of venn.short_names" in issues
    assert "upset.upset_order_by must be 'freq' or 'degree'" in issues
    assert "upset.upset_top_n must be positive" in issues
    assert "dpi must be positive" in issues
    assert "volcano.lfc_cutoff must be a positive number" not in issues


def test_validate_config_creates_output_dir(tmp_path):
    out_dir = tmp_path / "figures" / "run1"
    assert validate_config(Config(output_dir=str(out_dir))) == []
    assert out_dir.is_dir()


def test_validate_config_output_dir_is_a_file(tmp_path):
    target = tmp_path / "taken"
    target.write_text("")
    issues = validate_config(Config(output_dir=str(target)))
    assert issues == [f"Cannot create output directory: {target}"]
