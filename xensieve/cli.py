import logging
from typing import List, Optional
import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install
from rich.table import Table

from .config import load_config
from .decorators import handle_sieve_errors
from .parser import infix_to_postfix
from .sieve import Sieve

# Initialize Rich Traceback for better error messages
install(show_locals=False)

# Initialize Rich Console
console = Console()

# Configure logging to use Rich's RichHandler
logging.basicConfig(
    level=logging.INFO,  # Set to INFO by default, DEBUG if verbose
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger(__name__)

app = typer.Typer(help="Evaluate sieves: Boolean combinations of residual classes.")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose mode"),
):
    """
    xensieve - evaluate sieves built from residual classes.

    A residual class MODULUS@SHIFT is every integer congruent to SHIFT
    modulo MODULUS. Combine them with & (intersection), | (union),
    ^ (symmetric difference) and ! (complement).
    """
    cfg = load_config()
    if not cfg.cli.color:
        console.no_color = True
    if verbose or cfg.cli.verbose:
        logging.getLogger("xensieve").setLevel(logging.DEBUG)
        console.print("[bold green]Verbose mode enabled.[/bold green]")


def _source_range(start: Optional[int], stop: Optional[int], step: Optional[int]) -> range:
    """Build the iteration source, filling unset bounds from config."""
    defaults = load_config().range
    source = range(
        defaults.start if start is None else start,
        defaults.stop if stop is None else stop,
        defaults.step if step is None else step,
    )
    logger.debug(f"Iterating over {source}")
    return source


def _print_sequence(values) -> None:
    console.print(" ".join(str(v) for v in values), soft_wrap=True, highlight=False)


@app.command()
def about():
    """Display information about xensieve."""
    console.print("[bold cyan]xensieve - Residual Class Sieves[/bold cyan]")
    console.print("")
    console.print("Expression grammar:")
    console.print("  residual   MODULUS@SHIFT     e.g. 3@0, 5@4")
    console.print("  !a         complement        (binds tightest)")
    console.print("  a & b      intersection")
    console.print("  a ^ b      symmetric difference")
    console.print("  a | b      union             (binds loosest)")
    console.print("  ( ... )    grouping")
    console.print("")
    console.print("[bold]Commands:[/bold]")
    console.print("  xensieve show <expr>                 Canonical form")
    console.print("  xensieve postfix <expr>              Postfix token order")
    console.print("  xensieve contains <expr> <n>...      Membership test")
    console.print("  xensieve values <expr>               Contained values in a range")
    console.print("  xensieve states <expr>               Membership flag per value")
    console.print("  xensieve intervals <expr>            Gaps between contained values")
    console.print("  xensieve describe <expr>             Tree structure as JSON/YAML")
    console.print("  xensieve config                      View or edit defaults")


@app.command()
@handle_sieve_errors
def show(
    expression: str = typer.Argument(..., help="Sieve expression"),
):
    """
    Show the canonical form of a sieve.

    Examples:
        xensieve show "3@0 | 5@1 | 5@4"
        xensieve show "5@10"            # Sieve{5@0}
    """
    sieve = Sieve(expression)
    console.print(str(sieve), markup=False, highlight=False)


@app.command()
@handle_sieve_errors
def postfix(
    expression: str = typer.Argument(..., help="Sieve expression"),
):
    """
    Show the postfix (reverse Polish) token order of an expression.

    Examples:
        xensieve postfix "!3@1 & 6@2 | !(10@0 | 2@0 | 3@0)"
    """
    tokens = infix_to_postfix(expression)
    _print_sequence(tokens)


@app.command()
@handle_sieve_errors
def contains(
    expression: str = typer.Argument(..., help="Sieve expression"),
    values: List[int] = typer.Argument(..., help="Integers to test (use -- before negative values)"),
):
    """
    Test integers for membership in a sieve.

    Examples:
        xensieve contains "5@0|5@1|5@4" 0 2 4
        xensieve contains "!(5@0|5@1)" -- -2 -1
    """
    sieve = Sieve(expression)

    table = Table(title=str(sieve))
    table.add_column("Value", style="cyan", justify="right")
    table.add_column("Contained", style="green")

    for value in values:
        found = sieve.contains(value)
        table.add_row(str(value), "yes" if found else "[dim]no[/dim]")

    console.print(table)


@app.command()
@handle_sieve_errors
def values(
    expression: str = typer.Argument(..., help="Sieve expression"),
    start: Optional[int] = typer.Option(None, "--start", help="First value (defaults from config)"),
    stop: Optional[int] = typer.Option(None, "--stop", help="Stop value, exclusive (defaults from config)"),
    step: Optional[int] = typer.Option(None, "--step", help="Step between values (defaults from config)"),
):
    """
    List the values of a range that the sieve contains.

    Examples:
        xensieve values "3@0&4@0" --stop 25
        xensieve values "!(5@0|5@1|5@4)" --start=-10 --stop 10
    """
    sieve = Sieve(expression)
    _print_sequence(sieve.iter_value(_source_range(start, stop, step)))


@app.command()
@handle_sieve_errors
def states(
    expression: str = typer.Argument(..., help="Sieve expression"),
    start: Optional[int] = typer.Option(None, "--start", help="First value (defaults from config)"),
    stop: Optional[int] = typer.Option(None, "--stop", help="Stop value, exclusive (defaults from config)"),
    step: Optional[int] = typer.Option(None, "--step", help="Step between values (defaults from config)"),
):
    """
    Show membership for every value of a range as a 0/1 string.

    Examples:
        xensieve states "3@0" --stop 9     # 100100100
    """
    sieve = Sieve(expression)
    flags = sieve.iter_state(_source_range(start, stop, step))
    console.print("".join("1" if flag else "0" for flag in flags), soft_wrap=True, highlight=False)


@app.command()
@handle_sieve_errors
def intervals(
    expression: str = typer.Argument(..., help="Sieve expression"),
    start: Optional[int] = typer.Option(None, "--start", help="First value (defaults from config)"),
    stop: Optional[int] = typer.Option(None, "--stop", help="Stop value, exclusive (defaults from config)"),
    step: Optional[int] = typer.Option(None, "--step", help="Step between values (defaults from config)"),
):
    """
    List the gaps between successive contained values of a range.

    Examples:
        xensieve intervals "3@0|4@1" --stop 10     # 1 2 2 1 3
    """
    sieve = Sieve(expression)
    _print_sequence(sieve.iter_interval(_source_range(start, stop, step)))


@app.command()
@handle_sieve_errors
def describe(
    expression: str = typer.Argument(..., help="Sieve expression"),
    output_format: str = typer.Option("json", "--format", "-f", help="Output format: json or yaml"),
):
    """
    Dump the combination tree of a sieve.

    Examples:
        xensieve describe "!(3@0|5@1)&9@6"
        xensieve describe "3@0^4@0" --format yaml
    """
    if output_format not in ("json", "yaml"):
        raise ValueError(f"Unknown format '{output_format}' (expected json or yaml)")

    sieve = Sieve(expression)
    data = {
        "expression": str(sieve.root),
        "residuals": [str(r) for r in sieve.root.residuals()],
        "tree": sieve.root.to_dict(),
    }

    if output_format == "json":
        console.print_json(data=data)
    else:
        text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
        console.print(text.rstrip(), markup=False, highlight=False, soft_wrap=True)


@app.command()
@handle_sieve_errors
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    init: bool = typer.Option(False, "--init", help="Initialize config file with defaults"),
    # Range settings
    set_start: Optional[int] = typer.Option(None, "--start", help="Set default range start"),
    set_stop: Optional[int] = typer.Option(None, "--stop", help="Set default range stop (exclusive)"),
    set_step: Optional[int] = typer.Option(None, "--step", help="Set default range step"),
    # CLI settings
    set_verbose: Optional[bool] = typer.Option(None, "--cli-verbose/--no-cli-verbose", help="Enable verbose output by default"),
    set_color: Optional[bool] = typer.Option(None, "--cli-color/--no-cli-color", help="Enable colored output by default"),
):
    """
    View or edit xensieve configuration.

    Configuration is stored at ~/.config/xensieve/config.json
    (or ~/.xensieve/config.json).

    Examples:
        # Show current configuration
        xensieve config --show

        # Initialize config file with defaults
        xensieve config --init

        # Iterate over -50..49 by default
        xensieve config --start=-50 --stop 50
    """
    from .config import ensure_config_exists, update_config, get_config_path

    if init:
        config_path = ensure_config_exists()
        console.print(f"[green]Configuration initialized at {config_path}[/green]")
        return

    has_settings = any([
        set_start is not None, set_stop is not None, set_step is not None,
        set_verbose is not None, set_color is not None,
    ])

    if show or not has_settings:
        cfg = load_config()
        config_path = get_config_path()

        console.print("\n[bold]xensieve Configuration[/bold]")
        console.print(f"[dim]Location: {config_path}[/dim]\n")

        console.print("[bold cyan]Range Settings:[/bold cyan]")
        console.print(f"  Start:       {cfg.range.start}")
        console.print(f"  Stop:        {cfg.range.stop}")
        console.print(f"  Step:        {cfg.range.step}")

        console.print("\n[bold cyan]CLI Settings:[/bold cyan]")
        console.print(f"  Verbose:     {cfg.cli.verbose}")
        console.print(f"  Color:       {cfg.cli.color}")
        return

    changes = []
    if set_start is not None:
        changes.append(f"Range start: {set_start}")
    if set_stop is not None:
        changes.append(f"Range stop: {set_stop}")
    if set_step is not None:
        changes.append(f"Range step: {set_step}")
    if set_verbose is not None:
        changes.append(f"CLI verbose: {set_verbose}")
    if set_color is not None:
        changes.append(f"CLI color: {set_color}")

    update_config(
        range_start=set_start,
        range_stop=set_stop,
        range_step=set_step,
        cli_verbose=set_verbose,
        cli_color=set_color,
    )

    console.print("[green]Configuration updated:[/green]")
    for change in changes:
        console.print(f"  {change}")


if __name__ == "__main__":
    app()
