#!/usr/bin/env python3
#
# PROJECT: shaded-cli-renderer
# MODULE: client_demo.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import argparse
import curses
import logging
import os
import sys

# Ensure local package is importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from shaded_cli_renderer.demo import DemoApp


def parse_args(argv=None):
    epilog = """\
examples:
  %(prog)s                                   Bundled cube only
  %(prog)s penguin.obj                       Model on the left, cube on the right
  %(prog)s penguin.obj --wireframe --bounds  Start with overlays enabled
  %(prog)s a.obj b.obj --no-cube             Several models, no cube
  %(prog)s penguin.obj --log-file viewer.log --verbose

keys:
  w a s d q e  move (uppercase = fast)     arrows / mouse drag  look
  + -          dolly                       1 2 3 4  wireframe/normals/bounds/specular
  Tab `        select next/previous        x  delete selected   c  clear all
  h l j k u o  rotate selected Y/X/Z       [ ]  scale selected  n  toggle unlit
  H L J K U O  move selected X/Y/Z         i  load an .obj (path prompt)
  r            reset view                  p  export selected   Esc  quit
"""
    parser = argparse.ArgumentParser(
        description="CLI Shaded Mesh Renderer",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("models", nargs='*', help="Paths to .obj files")
    parser.add_argument("--no-cube", action="store_true",
                        help="Don't add the bundled cube to the default scene")
    parser.add_argument("--no-color", action="store_true",
                        help="Disable color output")
    parser.add_argument("--mono", action="store_true",
                        help="Force monochrome output")
    parser.add_argument("--ascii", action="store_true",
                        help="Use ASCII brightness characters instead of half blocks")
    parser.add_argument("--wireframe", action="store_true",
                        help="Start with the wireframe overlay on")
    parser.add_argument("--normals", action="store_true",
                        help="Start with the normal-vector overlay on")
    parser.add_argument("--bounds", action="store_true",
                        help="Start with the bounding-box overlay on")
    parser.add_argument("--no-specular", action="store_true",
                        help="Disable specular highlights")
    parser.add_argument("--bg-color", default="#101010",
                        help="Background color in hex #RRGGBB (default: #101010)")
    parser.add_argument("--fps", type=int, default=60,
                        help="Target frame rate (default: 60)")
    parser.add_argument("--export-path", default="exported_model.obj",
                        help="Where 'p' writes the selected mesh (default: exported_model.obj)")
    parser.add_argument("--log-file", default=None,
                        help="Write log records to this file")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log debug messages")
    return parser.parse_args(argv)


def configure_logging(args):
    level = logging.DEBUG if args.verbose else logging.INFO
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    else:
        # Only the HUD handler installed by DemoApp; nothing goes to the tty
        logging.getLogger().setLevel(level)
        logging.getLogger().addHandler(logging.NullHandler())


def main(stdscr, args):
    app = DemoApp(stdscr, args)
    app.run()


if __name__ == "__main__":
    args = parse_args()
    configure_logging(args)
    os.environ.setdefault("ESCDELAY", "25")
    try:
        curses.wrapper(lambda s: main(s, args))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)
