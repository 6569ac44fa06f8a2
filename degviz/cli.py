"""
Command-line interface for degviz
"""

import string
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
import matplotlib.pyplot as plt
import seaborn as sns

from . import __version__, check_dependencies, get_info
from .config import Config, get_default_config, load_config, save_config
from .utils import read_gene_list, read_table, setup_logging


class CLIContext:
    def __init__(self):
        self.config_file: Optional[Path] = None
        self.config: Optional[Config] = None
        self.verbose: bool = False
        self.quiet: bool = False

    @property
    def effective_config(self) -> Config:
        return self.config if self.config is not None else get_default_config()


def _pick(value: Any, section: Dict[str, Any], key: str) -> Any:
    """Command-line value if given, else the config value"""
    return value if value is not None else section.get(key)


def _fail(cli_ctx: CLIContext, step: str, error: Exception) -> None:
    click.echo(f"{step} failed: {error}", err=True)
    if cli_ctx.verbose:
        import traceback

        traceback.print_exc()
    sys.exit(1)


@click.group()
@click.version_option(__version__)
@click.option(
    "--config", "-c", type=click.Path(exists=True), help="Configuration file path"
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--quiet", "-q", is_flag=True, help="Enable quiet mode (minimal output)")
@click.pass_context
def main(ctx, config, verbose, quiet):
    """
    degviz: volcano, Venn and UpSet plots for omics results

    Draws publication-style figures from DESeq2 result tables, gene lists
    and ChIPseeker peak annotation tables.
    """
    cli_ctx = CLIContext()
    cli_ctx.verbose = verbose
    cli_ctx.quiet = quiet

    log_level = "DEBUG" if verbose else "WARNING" if quiet else "INFO"
    setup_logging(level=log_level)

    if config:
        cli_ctx.config_file = Path(config)
        try:
            cli_ctx.config = load_config(cli_ctx.config_file)
        except Exception as e:
            _fail(cli_ctx, "Loading configuration", e)

    ctx.obj = cli_ctx


@main.command()
def info():
    """Show degviz package information"""

    info_data = get_info()

    click.echo("=" * 50)
    click.echo(f"degviz v{info_data['version']}")
    click.echo("=" * 50)
    click.echo(f"Description: {info_data['description']}")
    click.echo(f"Python version: {info_data['python_version']}")
    click.echo()

    click.echo("Available modules:")
    for module in info_data["modules"]:
        click.echo(f"  - {module}")
    click.echo()

    deps = check_dependencies()
    click.echo("Dependency status:")
    for dep, available in deps.items():
        status = "✓" if available else "✗"
        click.echo(f"  {status} {dep}")


@main.command()
@click.argument("output_file", type=click.Path())
@click.option(
    "--format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    help="Output format for configuration file",
)
def init_config(output_file, format):
    """Initialize a new degviz configuration file"""

    output_path = Path(output_file)
    if format == "json" and output_path.suffix.lower() != ".json":
        output_path = output_path.with_suffix(".json")

    if output_path.exists():
        if not click.confirm(f"File {output_path} already exists. Overwrite?"):
            click.echo("Configuration initialization cancelled.")
            return

    try:
        save_config(get_default_config(), output_path)
        click.echo(f"Configuration file created: {output_path}")
        click.echo("Edit this file to customize your plotting parameters.")
    except Exception as e:
        click.echo(f"Error creating configuration file: {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument("config_file", type=click.Path(exists=True))
def validate_config(config_file):
    """Validate a degviz configuration file"""

    try:
        from .config import validate_config as validate_config_func

        config = load_config(config_file)
        click.echo(f"Configuration loaded successfully: {config_file}")

        issues = validate_config_func(config)

        if not issues:
            click.echo("✓ Configuration is valid")
        else:
            click.echo("Configuration issues found:")
            for issue in issues:
                click.echo(f"  ✗ {issue}")
            sys.exit(1)

    except Exception as e:
        click.echo(f"Configuration validation failed: {e}", err=True)
        sys.exit(1)


@main.command()
@click.argument("table", type=click.Path(exists=True))
@click.option("--pval-cutoff", type=float, help="Adjusted p-value threshold")
@click.option("--lfc-cutoff", type=float, help="log2 fold change threshold")
@click.option("--name", "exp_name", default="Volcano", show_default=True,
              help="Experiment name used in the title and file name")
@click.option("--top-n", type=int, help="Genes to label per direction")
@click.option("--y-limit", type=float, help="Fixed Y-axis maximum")
@click.option("--symbol-col", help="Column holding gene symbols")
@click.option("--output", "-o", type=click.Path(), help="Output directory")
@click.option(
    "--format",
    "formats",
    multiple=True,
    type=click.Choice(["png", "pdf", "svg"]),
    help="Image formats to write",
)
@click.pass_context
def volcano(ctx, table, pval_cutoff, lfc_cutoff, exp_name, top_n, y_limit,
            symbol_col, output, formats):
    """Draw a volcano plot from a DESeq2 results table (CSV/TSV)"""

    from .volcano import AxisScaling, draw_volcano

    cli_ctx = ctx.obj
    config = cli_ctx.effective_config
    params = config.volcano
    out = config.output

    output_dir = Path(output or config.output_dir or ".")
    formats = list(formats) or out.get("formats", ["png"])

    try:
        deg_result = read_table(table)
        fig = draw_volcano(
            deg_result,
            pval_cutoff=_pick(pval_cutoff, params, "pval_cutoff"),
            lfc_cutoff=_pick(lfc_cutoff, params, "lfc_cutoff"),
            exp_name=exp_name,
            y_limit=y_limit,
            label_n_top=_pick(top_n, params, "label_n_top"),
            label_size=params.get("label_size", 6),
            label_force=params.get("label_force", 0.5),
            point_size=params.get("point_size", 4),
            point_alpha=params.get("point_alpha", 0.3),
            plot_colors=params.get("plot_colors"),
            symbol_col=_pick(symbol_col, params, "symbol_col") or "Symbol",
            scaling=AxisScaling.from_dict(params.get("axis_scaling")),
            figsize=(out.get("width", 6), out.get("height", 6)),
            output_path=output_dir / f"{exp_name}_volcano",
            formats=formats,
            dpi=out.get("dpi", 300),
        )
        plt.close(fig)
    except Exception as e:
        _fail(cli_ctx, "Volcano plot", e)

    click.echo(f"Volcano plot written to {output_dir} ({', '.join(formats)})")


@main.command()
@click.argument("gene_lists", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--name", "names", multiple=True,
              help="Full set name, once per gene list (defaults to file names)")
@click.option("--title", help="Venn diagram title")
@click.option("--output", "-o", type=click.Path(), default="venn.png",
              show_default=True, help="Output image file")
@click.pass_context
def venn(ctx, gene_lists, names, title, output):
    """Draw a Venn diagram of gene lists (one gene per line)"""

    from .venn import draw_venn_with_legend

    cli_ctx = ctx.obj
    config = cli_ctx.effective_config
    params = config.venn

    if names and len(names) != len(gene_lists):
        click.echo(
            f"Error: got {len(names)} --name values for {len(gene_lists)} gene lists",
            err=True,
        )
        sys.exit(1)

    long_names = list(names) if names else [Path(p).stem for p in gene_lists]

    n_sets = len(gene_lists)
    short_names = params.get("short_names", [])
    if len(short_names) == n_sets:
        set_colors = params.get("set_colors")
        legend_order = params.get("legend_order")
    else:
        short_names = list(string.ascii_uppercase[:n_sets])
        set_colors = sns.color_palette("husl", n_sets).as_hex()
        legend_order = short_names[::-1]

    try:
        gene_sets = {
            long: read_gene_list(path) for long, path in zip(long_names, gene_lists)
        }
        fig = draw_venn_with_legend(
            gene_sets,
            title=_pick(title, params, "title"),
            set_colors=set_colors,
            short_names=short_names,
            legend_order=legend_order,
            legend_title=params.get("legend_title", "Groups"),
            layout_widths=params.get("layout_widths", (3, 1.5)),
            label=params.get("label", "both"),
            output_path=output,
            dpi=config.output.get("dpi", 300),
        )
        plt.close(fig)
    except Exception as e:
        _fail(cli_ctx, "Venn diagram", e)

    click.echo(f"Venn diagram written to {output}")


@main.command()
@click.argument("table", type=click.Path(exists=True))
@click.option("--sample-name", default="atac_upset", show_default=True,
              help="Sample name used in the title and file names")
@click.option("--save-dir", type=click.Path(), help="Output directory")
@click.option("--top-n", type=int, help="Number of combinations to show")
@click.option("--order-by", type=click.Choice(["freq", "degree"]),
              help="Combination ordering")
@click.pass_context
def upset(ctx, table, sample_name, save_dir, top_n, order_by):
    """Draw an UpSet plot from a ChIPseeker annotation table (CSV/TSV)"""

    from .upset import draw_atac_upset

    cli_ctx = ctx.obj
    config = cli_ctx.effective_config
    params = config.upset

    save_dir = save_dir or config.output_dir or "."

    try:
        data = read_table(table)
        fig = draw_atac_upset(
            data,
            fill_color=params.get("fill_color", "#56B4E9"),
            bar_text_angle=params.get("bar_text_angle", 90),
            bar_text_size=params.get("bar_text_size", 2.7),
            upset_top_n=_pick(top_n, params, "upset_top_n"),
            upset_order_by=_pick(order_by, params, "upset_order_by"),
            img_width=params.get("img_width", 5),
            img_height=params.get("img_height", 4),
            sample_name=sample_name,
            save_dir=save_dir,
            dpi=params.get("dpi", 1000),
        )
        plt.close(fig)
    except Exception as e:
        _fail(cli_ctx, "UpSet plot", e)

    click.echo(f"UpSet plot written to {Path(save_dir) / (sample_name + '_atac_ann')}.{{png,pdf}}")


if __name__ == "__main__":
    main()
