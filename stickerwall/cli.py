#!/usr/bin/env python3
"""
StickerWall CLI

Command-line interface for laying out and inspecting walls.

Usage:
    stickerwall layout [wall.yaml] [options]
    stickerwall cull <wall.yaml> --scroll Y [options]
    stickerwall frame <wall.yaml> [--focus ID] [options]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__


def setup_logging(verbose: bool = False):
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def load_wall_config(args):
    """Load the configuration named on the command line, or the defaults."""
    from .config import WallConfig, load_config

    config_path = getattr(args, 'config', None)
    config = load_config(config_path) if config_path else WallConfig()
    seed = getattr(args, 'seed', None)
    if seed is not None:
        config.seed = seed
    return config


def load_session(args):
    """
    Build a session from a wall file and command-line overrides.

    Returns:
        WallSession, or None if the wall could not be loaded
    """
    from .api.session import WallSession
    from .board.wall_file import build_store, parse_wall_file

    config = load_wall_config(args)
    try:
        wall = parse_wall_file(Path(args.wall))
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return None

    if wall.seed is not None and getattr(args, 'seed', None) is None:
        config.seed = wall.seed

    store = build_store(wall, config.default_board_width, config.bound_margin,
                        config.max_rotation)
    session = WallSession(config, store=store)

    board_width = getattr(args, 'board_width', None)
    if board_width is not None:
        session.set_board_width(board_width)

    session.set_viewport(
        scroll_offset=getattr(args, 'scroll', 0.0) or 0.0,
        height=getattr(args, 'viewport_height', None),
        width=getattr(args, 'viewport_width', None),
    )
    return session


def emit(data: Any, output: Optional[str] = None):
    """Print JSON to stdout or write it to a file."""
    text = json.dumps(data, indent=2)
    if output:
        Path(output).write_text(text + "\n")
        print(f"Wrote: {output}")
    else:
        print(text)


def placement_rows(placements) -> List[Dict[str, Any]]:
    return [
        {
            "id": p.id,
            "kind": p.kind.value,
            "x": round(p.x, 2),
            "y": round(p.y, 2),
            "rotation": round(p.rotation, 2),
            "derived": p.derived,
        }
        for p in placements
    ]


def cmd_layout(args):
    """Resolve positions for a wall file or a run of demo badges."""
    from .board.abstraction import Item, ItemKind
    from .placement.layout import LayoutEngine

    if args.wall:
        session = load_session(args)
        if session is None:
            return 1
        placements = session.placements()
    else:
        if args.count < 0:
            print("Error: --count must not be negative", file=sys.stderr)
            return 1
        config = load_wall_config(args)
        engine = LayoutEngine(config)
        items = [Item(id=i + 1, kind=ItemKind.BADGE) for i in range(args.count)]
        placements = engine.resolve(items, args.board_width)

    emit(placement_rows(placements), args.output)
    return 0


def cmd_cull(args):
    """List the ids rendered for a scroll position, in paint order."""
    session = load_session(args)
    if session is None:
        return 1

    frame = session.frame()
    emit([entry.id for entry in frame], args.output)
    return 0


def cmd_frame(args):
    """Print the render plan for a scroll position."""
    session = load_session(args)
    if session is None:
        return 1

    if args.focus is not None:
        focus_id = _coerce_id(args.focus, session.store.ids())
        if not session.focus(focus_id):
            print(f"Error: Item {args.focus} not found", file=sys.stderr)
            return 1

    emit([entry.to_dict() for entry in session.frame()], args.output)
    return 0


def _coerce_id(raw: str, known: List[Any]) -> Any:
    """Match a command-line id against stored ids, which may be ints."""
    for item_id in known:
        if str(item_id) == raw:
            return item_id
    return raw


def _add_common(parser: argparse.ArgumentParser):
    parser.add_argument('--config', help='YAML file overriding wall configuration')
    parser.add_argument('--seed', type=int, help='Layout seed (default: 12345)')
    parser.add_argument('--board-width', type=float, help='Board width in px (default: 800)')
    parser.add_argument('-o', '--output', help='Write JSON to this file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')


def _add_viewport(parser: argparse.ArgumentParser):
    parser.add_argument('--scroll', type=float, default=0.0, help='Scroll offset in px')
    parser.add_argument('--viewport-height', type=float, help='Viewport height in px')
    parser.add_argument('--viewport-width', type=float, help='Viewport width in px')


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="StickerWall - freeform wall layout engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  stickerwall layout --count 5 --seed 7
  stickerwall layout wall.yaml --board-width 1280
  stickerwall cull wall.yaml --scroll 1400 --viewport-height 900
  stickerwall frame wall.yaml --focus 1001
        """,
    )

    parser.add_argument('--version', action='version', version=f'stickerwall {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    layout_parser = subparsers.add_parser('layout', help='Resolve item positions')
    layout_parser.add_argument('wall', nargs='?', help='Path to a wall YAML file')
    layout_parser.add_argument('--count', type=int, default=5,
                               help='Demo badges to lay out without a wall file (default: 5)')
    _add_common(layout_parser)

    cull_parser = subparsers.add_parser('cull', help='List visible items for a scroll position')
    cull_parser.add_argument('wall', help='Path to a wall YAML file')
    _add_viewport(cull_parser)
    _add_common(cull_parser)

    frame_parser = subparsers.add_parser('frame', help='Print the render plan')
    frame_parser.add_argument('wall', help='Path to a wall YAML file')
    frame_parser.add_argument('--focus', help='Highlight items related to this id')
    _add_viewport(frame_parser)
    _add_common(frame_parser)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)

    commands = {
        'layout': cmd_layout,
        'cull': cmd_cull,
        'frame': cmd_frame,
    }

    try:
        return commands[args.command](args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
