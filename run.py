"""Agent Dungeon CLI entry point.

Provides subcommands for generating a dungeon in the terminal and for running
the Socket.IO server that streams generation to browsers. Accepts
configuration via flags and environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

import colorama
from colorama import Fore, Style
from dotenv import load_dotenv

from agentdungeon import __version__


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Agent Dungeon Generator

    Grow a grid dungeon by walking an agent that carves rooms and corridors,
    either in the terminal or behind a Flask/Socket.IO server. CLI flags take
    precedence over environment variables.
    """

    epilog = dedent(
        """
        Environment variables:
          DUNGEON_SIZE          Grid side length (default: 25)
          DUNGEON_MIN_SIZE      Minimum room side / corridor length (default: 3)
          DUNGEON_MAX_SIZE      Maximum room side / corridor length (default: 7)
          DUNGEON_FILL_TARGET   Stochastic stop ratio (default: 0.4)
          DUNGEON_CHANCE_STEP   Stochastic chance increment (default: 2)
          DUNGEON_SEED          Fixed seed (int or word)
          DUNGEON_LOG_LEVEL     debug | info | warn | error (default: info)
          HOST / PORT           Server bind address (default: 0.0.0.0:5000)

        Examples:
          # Generate with the constructive walk and print the map
          python run.py generate

          # Watch the stochastic walk, seeded by a word
          python run.py generate --strategy stochastic --seed crypt --animate

          # Emit the result as JSON
          python run.py generate --seed 42 --json

          # Run the server on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="agentdungeon",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Agent Dungeon {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a dungeon and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run one generation session in the terminal",
    )
    gen_parser.add_argument(
        "--strategy",
        choices=["constructive", "stochastic"],
        default="constructive",
        help="Generation strategy (default: constructive)",
    )
    gen_parser.add_argument("--seed", default=None, help="Seed (int or word; default: env DUNGEON_SEED or random)")
    gen_parser.add_argument("--size", type=int, default=None, help="Grid side length (default: env DUNGEON_SIZE or 25)")
    gen_parser.add_argument("--animate", action="store_true", help="Redraw the map after every step")
    gen_parser.add_argument("--delay", type=float, default=0.05, help="Seconds between animated frames (default: 0.05)")
    gen_parser.add_argument("--debug-probes", action="store_true", help="Show corridor clearance probes while animating")
    gen_parser.add_argument("--json", action="store_true", help="Print the result as JSON instead of a map")
    gen_parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    gen_parser.set_defaults(command="generate")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the Socket.IO web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask/Socket.IO server",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode with verbose error pages")
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to generate
    if not any(a in ("generate", "server") for a in argv):
        argv = list(argv) + ["generate"]

    return parser.parse_args(argv)


def run_generate(args: argparse.Namespace) -> int:
    from agentdungeon.console import ConsoleRenderer
    from agentdungeon.dungeon import ConfigError, DungeonConfig, DungeonGenerator, NullRenderer
    from agentdungeon.dungeon.api_helpers.params import build_generation_config
    from agentdungeon.dungeon.api_helpers.payload import result_payload

    color = not args.no_color and sys.stdout.isatty()
    try:
        strategy, config = build_generation_config(
            DungeonConfig.from_env(), strategy=args.strategy, seed=args.seed, size=args.size
        )
    except ConfigError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    if args.json:
        renderer = NullRenderer()
    else:
        renderer = ConsoleRenderer(color=color, animate=args.animate, delay=args.delay, show_debug=args.debug_probes)
    result = DungeonGenerator(config, renderer=renderer).run(strategy)
    if args.json:
        print(json.dumps(result_payload(result)))
        return 0
    m = result.metrics
    summary = (
        f"seed={result.seed} strategy={strategy} rooms={m['rooms_placed']} "
        f"corridors={m['corridors_placed']} filled={m['filled_tiles']} ({m['fill_ratio'] * 100:.1f}%)"
    )
    print(f"{Fore.CYAN}{summary}{Style.RESET_ALL}" if color else summary)
    return 0


def run_server(args: argparse.Namespace) -> int:
    host = args.host or os.getenv("HOST", "0.0.0.0")
    port = int(args.port or os.getenv("PORT", "5000"))
    debug = bool(args.debug or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from agentdungeon.logging_utils import log
    from agentdungeon.server import start_server

    divider = "=" * 40
    print("\n".join([divider, "  Agent Dungeon Server", divider, f"  Host: {host}", f"  Port: {port}", divider, ""]))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file, override=True)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()
    colorama.just_fix_windows_console()
    if args.command == "server":
        return run_server(args)
    return run_generate(args)


def entry() -> None:
    """Console-script hook for the installed ``agentdungeon`` command."""
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    entry()
