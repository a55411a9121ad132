"""CLI entry point: python -m proplead <command>."""

from __future__ import annotations

import argparse
import logging
import sys


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("lead_file", help="YAML or JSON file of lead (and task) records")
    parser.add_argument("--now", default="", help="Reference time as ISO-8601 (default: current UTC time)")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="proplead",
        description="PropLead lead scoring CLI",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    sc = sub.add_parser("score", help="Rescore every lead in a file")
    _add_common(sc)
    sc.add_argument("--json", action="store_true", default=False, help="Output as JSON")
    sc.add_argument("--rules", default="", help="YAML file of scoring rule overrides")

    ini = sub.add_parser("initial", help="Creation-time score for a new lead")
    ini.add_argument("--source", default="manual", help="Acquisition channel (default: manual)")
    ini.add_argument("--budget", default="", help="Stated budget, e.g. 5000000 or '50L'")
    ini.add_argument("--rules", default="", help="YAML file of scoring rule overrides")

    qu = sub.add_parser("queue", help="Today's telecalling queue")
    _add_common(qu)

    st = sub.add_parser("stats", help="Dashboard statistics")
    _add_common(st)
    st.add_argument("--json", action="store_true", default=False, help="Output as JSON")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "score":
        from proplead.cli.score import run_score
        run_score(args)
    elif args.command == "initial":
        from proplead.cli.score import run_initial
        run_initial(args)
    elif args.command == "queue":
        from proplead.cli.board import run_queue
        run_queue(args)
    elif args.command == "stats":
        from proplead.cli.board import run_stats
        run_stats(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
