"""
Command line entry point.

    ontograph model.yaml --title "Pizza" --visualization graffoo --graph-type class -o pizza.graphml
"""

import argparse
import logging
import sys
from typing import List, Optional

from ontograph.controller import GraphController, configure_logging
from ontograph.ir.errors import OntoGraphError
from ontograph.ontology_loader import load_ontology_model
from ontograph.schemas import parse_request

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ontograph",
        description="Render pre-resolved ontology records as a yEd GraphML document",
    )
    parser.add_argument("model", help="YAML file with the pre-resolved ontology records")
    parser.add_argument("--title", required=True, help="Graph title")
    parser.add_argument("--visualization", default="custom", help="custom, graffoo, vowl or uml")
    parser.add_argument("--graph-type", default="class", help="class, property, individual or both")
    parser.add_argument("--collapse-edges", action="store_true", help="Merge properties sharing domain and range")
    parser.add_argument("--style-file", help="YAML file with custom style defaults")
    parser.add_argument("--image-dir", help="Directory holding the VOWL marker images")
    parser.add_argument("--log-level", help="Overrides ONTOGRAPH_LOG_LEVEL")
    parser.add_argument("-o", "--output", help="Output file (stdout when omitted)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        request = parse_request(
            {
                "graph_title": args.title,
                "visualization": args.visualization,
                "graph_type": args.graph_type,
                "collapse_edges": args.collapse_edges,
            },
            style_file=args.style_file,
        )
        model = load_ontology_model(args.model)
        document = GraphController(image_dir=args.image_dir).render(request, model)
    except OntoGraphError as e:
        logger.error("[CLI] %s", e.message)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(document)
        logger.info("[CLI] Wrote %s", args.output)
    else:
        sys.stdout.write(document)
    return 0


if __name__ == "__main__":
    sys.exit(main())
