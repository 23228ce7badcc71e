"""Main entry point for pagebuilder."""

import argparse
import asyncio
import logging
import sys
from dataclasses import replace

from .components import ComponentLoader
from .config import load_config
from .core.compiled import CompiledNode
from .engine import TreeCompiler
from .errors import PageBuilderError
from .layout import LayoutLoader

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Pagebuilder - compile a page layout into its component tree",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "layout",
        metavar="PATH",
        help="Layout document (YAML or JSON)",
    )
    parser.add_argument(
        "-c", "--config",
        metavar="PATH",
        help="Editor config file (YAML)",
    )
    parser.add_argument(
        "-e", "--env",
        help="Environment flag (default: from config, 'edit')",
    )
    parser.add_argument(
        "-s", "--select",
        metavar="EL",
        help="Id of the selected node",
    )
    parser.add_argument(
        "-o", "--output",
        metavar="PATH",
        help="Write the validated layout back out (JSON for .json, YAML otherwise)",
    )
    return parser.parse_args(argv)


def format_tree(nodes: list[CompiledNode], depth: int = 0) -> list[str]:
    """Format a compiled tree as indented lines."""
    lines = []
    for node in nodes:
        indent = "  " * depth
        flags = ""
        if node.bindings is not None:
            flags += " [edit]"
        if node.overlay is not None:
            flags += f" [overlay: {len(node.overlay.handles)} handles]"
        hook_info = f" ({node.hook})" if node.hook else ""
        lines.append(f"{indent}- {node.key}: {node.name}{hook_info}{flags}")
        lines.extend(format_tree(node.children, depth + 1))
    return lines


def main(argv: list[str] | None = None) -> int:
    """Compile a layout document and print the compiled tree."""
    args = parse_args(argv)

    config = load_config(args.config)
    if args.env:
        config = replace(config, environment=args.env)
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    layout_loader = LayoutLoader()
    try:
        tree = layout_loader.load(args.layout)
        compiler = TreeCompiler(
            ComponentLoader(dict(config.components)),
            overlay_positions=config.overlay_positions,
        )
        compiled = asyncio.run(compiler.compile(tree, config.environment, args.select))
    except PageBuilderError as exc:
        logger.error("%s", exc)
        return 1

    print("Pagebuilder - compiled page")
    print("=" * 40)
    print(f"Page contains {sum(1 for node in compiled for _ in node.iter_nodes())} visible nodes "
          f"(env: {config.environment}):")
    for line in format_tree(compiled):
        print(line)

    if args.output:
        layout_loader.save(tree, args.output)
        print(f"\nSaved layout to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
