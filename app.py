#!/usr/bin/env python3
"""
EM Lab — electromagnetics teaching computation engine.

Usage:
    python app.py list                                  # List topics
    python app.py run load_analysis -p z_load=100+25j   # Compute one topic
    python app.py run array -p num_elements=16 --json   # Full result as JSON
    python app.py demo                                  # Tour of the engine
"""

import sys
import json
import logging
import argparse

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from emlab.errors import EngineError
from emlab.topics import evaluate, list_topics, parse_assignments, result_to_dict

logger = logging.getLogger("emlab")


def _format(value) -> str:
    if isinstance(value, float):
        return f"{value:.6g}"
    if isinstance(value, dict) and set(value) == {"re", "im"} and not isinstance(value["re"], list):
        return f"{value['re']:.6g} {'+' if value['im'] >= 0 else '-'} j{abs(value['im']):.6g}"
    if value is None:
        return "—"
    return str(value)


def _is_series(value) -> bool:
    """Curves, grids and long lists are summarised rather than printed."""
    if isinstance(value, list):
        return len(value) > 8
    if isinstance(value, dict):
        return any(isinstance(v, (list, dict)) for v in value.values())
    return False


def result_table(title: str, flat: dict) -> Table:
    table = Table(title=title)
    table.add_column("Quantity", style="cyan")
    table.add_column("Value", style="green")

    for k, v in flat.items():
        if _is_series(v):
            keys = ", ".join(v) if isinstance(v, dict) else f"{len(v)} values"
            table.add_row(k, f"[dim]sampled: {keys}[/dim]")
        else:
            table.add_row(k, _format(v))
    return table


def cmd_list(args):
    """List every registered topic."""
    console = Console()
    table = Table(title="Topics")
    table.add_column("Topic", style="cyan")
    table.add_column("Description")
    table.add_column("Defaults", style="dim")

    for entry in list_topics():
        defaults = ", ".join(f"{k}={v!r}" for k, v in entry["defaults"].items())
        table.add_row(entry["name"], entry["description"], defaults)

    console.print(table)


def cmd_run(args):
    """Evaluate one topic with key=value overrides."""
    console = Console()
    params = parse_assignments(args.params or [])
    result = evaluate(args.topic, **params)
    flat = result_to_dict(result)

    if args.json:
        console.print_json(json.dumps(flat, default=str))
        return

    if isinstance(flat, list):
        for i, item in enumerate(flat, 1):
            console.print(result_table(f"{args.topic} [{i}]", item if isinstance(item, dict) else {"value": item}))
    elif isinstance(flat, dict):
        console.print(result_table(args.topic, flat))
    else:
        console.print(f"{args.topic}: {_format(flat)}")


def cmd_demo(args):
    """Walk through one computation per area."""
    console = Console()
    console.print(Panel.fit(
        "[bold blue]EM Lab Demo[/bold blue]\n"
        "One worked example from each area of the engine",
        border_style="blue",
    ))

    steps = [
        ("Step 1: Load reflection", "load_analysis", {"z0": 50.0, "z_load": 100 + 0j},
         ["gamma_mag", "vswr", "return_loss_db"]),
        ("Step 2: Quarter-wave match", "quarter_wave", {"z0": 50.0, "r_load": 100.0, "freq_hz": 1e9},
         ["z_transformer", "length_m", "vswr_after"]),
        ("Step 3: Dielectric interface", "fresnel", {},
         ["theta_t_deg", "brewster_angle_deg", "is_tir"]),
        ("Step 4: Waveguide modes", "waveguide", {},
         ["single_mode_bandwidth"]),
        ("Step 5: Infinite wire", "infinite_wire", {"current": 10.0, "distance": 0.1},
         ["b", "h"]),
        ("Step 6: Series RLC", "rlc_circuit", {},
         ["f0", "q_factor", "bandwidth", "damping"]),
        ("Step 7: Broadside array", "array", {"num_elements": 8, "spacing": 0.5},
         ["hpbw_deg", "fnbw_deg", "directivity_dbi"]),
        ("Step 8: Link budget", "friis", {},
         ["path_loss_db", "received_power_dbm", "eirp_dbw"]),
    ]

    for heading, topic, params, keys in steps:
        console.print(f"\n[bold]{heading}[/bold]")
        result = evaluate(topic, **params)
        for key in keys:
            value = getattr(result, key)
            console.print(f"  {key}: {_format(result_to_dict(value))}")

    console.print("\n[bold green]Demo complete![/bold green] "
                  "Use 'python app.py list' to see every topic.")


def main():
    parser = argparse.ArgumentParser(
        description="EM Lab — electromagnetics teaching computation engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python app.py list
  python app.py run fresnel -p er1=1 er2=4 theta_i=0.5236
  python app.py run single_stub -p z_load=60-80j stub_type=open
  python app.py run radar --json
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command")

    subparsers.add_parser("list", help="List topics")

    run_parser = subparsers.add_parser("run", help="Compute a topic")
    run_parser.add_argument("topic", type=str, help="Topic name (see 'list')")
    run_parser.add_argument("-p", "--params", nargs="*",
                            help="Parameters as key=value pairs")
    run_parser.add_argument("--json", action="store_true", help="Print the full result as JSON")

    subparsers.add_parser("demo", help="Run demo")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    commands = {
        "list": cmd_list,
        "run": cmd_run,
        "demo": cmd_demo,
    }

    try:
        commands[args.command](args)
    except EngineError as exc:
        logger.error("%s", exc)
        sys.exit(2)


if __name__ == "__main__":
    main()
