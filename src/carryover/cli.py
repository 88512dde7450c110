import sys
from enum import Enum
from pathlib import Path
from typing import NoReturn, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from carryover.errors import CarryoverError

app = typer.Typer(
    name="carryover",
    help="Carryover: adstock and saturation transforms for marketing mix models",
    add_completion=False,
)

console = Console()


class KernelKind(str, Enum):
    cdf = "cdf"
    pdf = "pdf"


@app.callback()
def setup(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log debug messages to stderr"
    ),
) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")
    logger.enable("carryover")


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(1)


@app.command()
def adstock(
    values: list[float] = typer.Argument(..., help="Spend per period, in order"),
    theta: Optional[float] = typer.Option(
        None, "--theta", "-t", help="Geometric decay rate in [0, 1)"
    ),
    shape: Optional[float] = typer.Option(None, "--shape", help="Weibull shape"),
    scale: Optional[float] = typer.Option(
        None, "--scale", help="Weibull scale as a quantile fraction"
    ),
    kind: KernelKind = typer.Option(KernelKind.cdf, "--kind", "-k"),
    window_length: Optional[int] = typer.Option(
        None, "--window", "-w", help="Modelling window for the scale lookup"
    ),
) -> None:
    import numpy as np

    from carryover.transforms import geometric_adstock, kernel_halflife, weibull_adstock

    weibull = shape is not None or scale is not None
    if (theta is None) == (not weibull):
        _fail("Pass either --theta, or --shape and --scale.")
    if weibull and (shape is None or scale is None):
        _fail("Weibull adstock needs both --shape and --scale.")

    try:
        if theta is not None:
            title = f"Geometric adstock (θ={theta})"
            result = geometric_adstock(values, theta=theta)
        else:
            title = f"Weibull {kind.value.upper()} adstock (shape={shape}, scale={scale})"
            result = weibull_adstock(
                values,
                shape=shape,
                scale=scale,
                window_length=window_length,
                kind=kind.value,
            )
    except CarryoverError as e:
        _fail(str(e))

    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Period", style="dim", justify="right")
    table.add_column("Spend", justify="right")
    table.add_column("Adstocked", justify="right")
    table.add_column("Kernel", justify="right")

    for i, (x, d, k) in enumerate(zip(values, result.decayed, result.kernel), start=1):
        table.add_row(str(i), f"{x:,.2f}", f"{d:,.2f}", f"{k:.4f}")

    # Geometric decay counts from full effect in period 1, as in the curves table.
    decay = result.kernel
    if theta is not None:
        decay = np.concatenate(([1.0], decay[:-1]))

    console.print(table)
    console.print(f"Half-life: period {kernel_halflife(decay)}")


@app.command()
def saturation(
    values: list[float] = typer.Argument(..., help="Spend per period"),
    alpha: float = typer.Option(..., "--alpha", "-a", help="Hill shape, > 0"),
    gamma: float = typer.Option(
        ..., "--gamma", "-g", help="Inflexion as a fraction of the spend range"
    ),
    marginal: Optional[list[float]] = typer.Option(
        None, "--marginal", "-m", help="Evaluate the curve at these values instead"
    ),
) -> None:
    from carryover.transforms import hill_saturation

    try:
        response = hill_saturation(
            values, alpha=alpha, gamma=gamma, x_marginal=marginal or None
        )
    except CarryoverError as e:
        _fail(str(e))

    points = marginal if marginal else values
    table = Table(
        title=f"Hill saturation (α={alpha}, γ={gamma})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Spend", justify="right")
    table.add_column("Response", justify="right")
    for x, y in zip(points, response):
        table.add_row(f"{x:,.2f}", f"{y:.4f}")

    console.print(table)


@app.command()
def apply(
    data_path: Path = typer.Argument(
        ..., help="CSV with one row per period", exists=True
    ),
    config_path: Path = typer.Option(
        ..., "--config", "-c", help="JSON transform config", exists=True
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the transformed CSV here"
    ),
) -> None:
    import pandas as pd
    from pandera.errors import SchemaError
    from pydantic import ValidationError

    from carryover.data.schemas import load_transform_config
    from carryover.pipeline import apply_transforms

    console.print(f"📂 Loading config from [cyan]{config_path}[/cyan]")
    try:
        config = load_transform_config(config_path)
    except ValidationError as e:
        _fail(f"Invalid config: {e}")

    console.print(f"📊 Loading data from [cyan]{data_path}[/cyan]")
    df = pd.read_csv(data_path)

    try:
        out = apply_transforms(df, config)
    except SchemaError as e:
        _fail(f"Validation failed: {e}")
    except CarryoverError as e:
        _fail(str(e))

    new_cols = [c for c in out.columns if c not in df.columns]

    if output is not None:
        output.parent.mkdir(exist_ok=True, parents=True)
        out.to_csv(output, index=False)
        console.print(f"\n✅ [green]Saved {len(new_cols)} column(s) to {output}[/green]\n")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Period", style="dim", justify="right")
    for col in new_cols:
        table.add_column(col, justify="right")
    for i, row in enumerate(out[new_cols].itertuples(index=False), start=1):
        table.add_row(str(i), *(f"{float(v):,.4f}" for v in row))
    console.print(table)


@app.command()
def curves(
    show_adstock: bool = typer.Option(True, "--adstock/--no-adstock"),
    show_saturation: bool = typer.Option(True, "--saturation/--no-saturation"),
    n_periods: int = typer.Option(100, "--periods", "-n", min=2, help="Curve length"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Save curve tables as CSV to this directory"
    ),
) -> None:
    from carryover.transforms import adstock_curves, halflife_table, saturation_curves

    if show_adstock:
        decay = adstock_curves(n_periods=n_periods)
        halflives = halflife_table(decay)

        table = Table(
            title="Adstock half-lives (period closest to 50% effect)",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Family", style="dim")
        table.add_column("Kind")
        table.add_column("θ", justify="right")
        table.add_column("Shape", justify="right")
        table.add_column("Scale", justify="right")
        table.add_column("Half-life", justify="right")

        for row in halflives.itertuples(index=False):
            table.add_row(
                row.family,
                row.kind if isinstance(row.kind, str) else "",
                "" if row.family != "geometric" else f"{row.theta:.2f}",
                "" if row.family == "geometric" else f"{row.shape:g}",
                "" if row.family == "geometric" else f"{row.scale:g}",
                str(row.halflife),
            )
        console.print(table)

        if output is not None:
            output.mkdir(exist_ok=True, parents=True)
            decay.to_csv(output / "adstock_curves.csv", index=False)
            console.print(f"✅ Saved adstock curves to {output / 'adstock_curves.csv'}")

    if show_saturation:
        response = saturation_curves(n_points=n_periods)
        checkpoints = [p for p in (10, 25, 50, 75, 100) if p <= n_periods]

        table = Table(
            title="Hill response at selected spend levels",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Varying", style="dim")
        table.add_column("α", justify="right")
        table.add_column("γ", justify="right")
        for p in checkpoints:
            table.add_column(f"x={p}", justify="right")

        for (varying, alpha, gamma), curve in response.groupby(
            ["varying", "alpha", "gamma"], sort=False
        ):
            at = curve.set_index("x")["response"]
            table.add_row(
                varying,
                f"{alpha:g}",
                f"{gamma:g}",
                *(f"{float(at[float(p)]):.3f}" for p in checkpoints),
            )
        console.print(table)

        if output is not None:
            output.mkdir(exist_ok=True, parents=True)
            response.to_csv(output / "saturation_curves.csv", index=False)
            console.print(
                f"✅ Saved saturation curves to {output / 'saturation_curves.csv'}"
            )


@app.command()
def info() -> None:
    console.print(
        """
[bold blue]Carryover[/bold blue]
[dim]Adstock and saturation transforms for marketing mix models[/dim]

[bold]Adstock (carryover)[/bold]
  geometric     fixed decay: x[t] + θ · adstock[t-1]
  weibull cdf   decay rate that changes over time, peak at first period
  weibull pdf   flexible decay that can peak later (lagged effect)

[bold]Saturation (diminishing returns)[/bold]
  hill          α sets C- vs S-shape, γ the inflexion point

[bold]Rule-of-thumb θ ranges[/bold]
  TV 0.3-0.8    OOH/print/radio 0.1-0.4    digital 0-0.3

[bold]Commands[/bold]
  carryover adstock      Adstock a spend series
  carryover saturation   Saturate a spend series
  carryover apply        Apply a JSON config to a spend CSV
  carryover curves       Half-lives and response over parameter grids

[bold]Quick Start[/bold]
  $ carryover adstock 100 0 0 0 --theta 0.7
  $ carryover adstock 100 0 0 0 0 --shape 2 --scale 0.1 --kind pdf
  $ carryover saturation 10 20 50 80 100 --alpha 2 --gamma 0.5
"""
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
