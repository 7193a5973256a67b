"""
1) Parse the family tree data in a GEDCOM file into person and family records.
2) Build a networkx family graph and a repository on top of it.
3) Build the ancestral fan chart data for one individual.
4) Write the chart payload (or just the tree, with --update) as JSON.
"""

import argparse
import json
import logging
from pathlib import Path
import sys

from config import load_config
from graph import GraphRepository
from handlers import ChartServices, full_chart, update
from i18n import Translator
from models import ChartError
from parsing import load_records
from routes import RouteBuilder
from theme import ThemeColors


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build ancestral fan chart data from a GEDCOM file.")
    parser.add_argument("gedcom", type=Path, help="GEDCOM file to read")
    parser.add_argument("xref", help="Individual to center the chart on, e.g. I1")
    parser.add_argument("--generations", type=int)
    parser.add_argument("--fan-degree", type=int)
    parser.add_argument("--font-scale", type=int)
    parser.add_argument("--hide-empty-segments", action="store_true")
    parser.add_argument("--show-color-gradients", action="store_true")
    parser.add_argument("--config", type=Path, help="TOML configuration file")
    parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout")
    parser.add_argument("--update", action="store_true", help="Only output the ancestor tree")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def build_services(gedcom_path: Path, config_path: Path | None) -> ChartServices:
    config = load_config(config_path)

    print(f"Parsing GEDCOM file: {gedcom_path}", file=sys.stderr)
    persons, families = load_records(gedcom_path)
    print(f"  Found {len(persons)} persons and {len(families)} families", file=sys.stderr)

    repository = GraphRepository.from_records(persons, families)
    print(
        f"  Graph has {repository.G.number_of_nodes()} nodes and "
        f"{repository.G.number_of_edges()} edges",
        file=sys.stderr,
    )

    return ChartServices(
        repository=repository,
        translator=Translator.load(config.locale_dir, config.language),
        colors=ThemeColors(config.theme),
        routes=RouteBuilder(config.base_url),
        default_generations=config.default_generations,
        tree_name=config.tree_name,
        module_name=config.module_name,
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    services = build_services(args.gedcom, args.config)

    raw_options = {
        "generations": args.generations,
        "fanDegree": args.fan_degree,
        "fontScale": args.font_scale,
        "hideEmptySegments": args.hide_empty_segments,
        "showColorGradients": args.show_color_gradients,
    }

    handler = update if args.update else full_chart
    try:
        payload = handler(args.xref, raw_options, services)
    except ChartError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(text + "\n", encoding="utf-8")
        print(f"Chart data saved to {args.output}", file=sys.stderr)
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
