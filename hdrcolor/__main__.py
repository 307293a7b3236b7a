"""hdrcolor — Inspect, mix and preview unbounded float colours.

Usage: hdrcolor <command> [options] COLOR...

COLOR is a palette name or a CSS-style hex string (#fff, abc123), optionally
wrapped in double quotes as it would appear in JSON.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, hdrcolor looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import math
import sys
from functools import reduce

from hdrcolor.core.env import load_settings
from hdrcolor.core.image import save_swatch
from hdrcolor.core.palette import BUILTIN, load_palette, resolve
from hdrcolor.core.report import format_json, format_text
from hdrcolor.core.types import Report, Settings


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError(f'must be a finite number, got {text}')
    return value


def _build_parser() -> argparse.ArgumentParser:
    epilog = (
        'Examples:\n'
        "  hdrcolor parse '#ff0080' abc pink\n"
        "  hdrcolor parse '\"#abc\"' --json\n"
        '  hdrcolor mix red blue --scale 0.5\n'
        "  hdrcolor mix '#fff' '#f80' --mode mul\n"
        '  hdrcolor swatch out.png red yellow pink --size 32\n'
        '\n'
        'Env vars (set in .env or environment):\n'
        '  HDRCOLOR_PALETTE      JSON palette file, e.g. {"sky": "#87ceeb"}\n'
        '  HDRCOLOR_SWATCH_SIZE  swatch square size in pixels (default 64)\n'
        '\n'
        f'Built-in names: {", ".join(BUILTIN)}\n'
    )
    parser = argparse.ArgumentParser(
        prog='hdrcolor',
        description='Inspect, mix and preview unbounded float colours.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    # Global options before the subcommand
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument(
        '--palette',
        metavar='PATH',
        default=None,
        help='JSON palette file of name -> hex (overrides HDRCOLOR_PALETTE)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    p = sub.add_parser('parse', help='Report channels, hex and display values for colours')
    p.add_argument('colors', nargs='+', metavar='COLOR')
    p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')

    p = sub.add_parser('mix', help='Add or multiply colours, then scale the result')
    p.add_argument('colors', nargs='+', metavar='COLOR')
    p.add_argument(
        '-m',
        '--mode',
        choices=('add', 'mul'),
        default='add',
        help='Combine component-wise by sum or product (default: add)',
    )
    p.add_argument('-s', '--scale', type=_finite_float, default=1.0, metavar='F', help='Scale the result by F')
    p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')

    p = sub.add_parser('swatch', help='Write an image with one square per colour')
    p.add_argument('out', help='Output image path (format from extension, e.g. .png)')
    p.add_argument('colors', nargs='+', metavar='COLOR')
    p.add_argument('--size', type=int, default=None, metavar='N', help='Square size in pixels')

    return parser


def _palette(args: argparse.Namespace, settings: Settings) -> dict:
    path = args.palette or settings.palette_path
    if not path:
        return {}
    palette = load_palette(path)
    print(f'hdrcolor: loaded palette {path} ({len(palette)} colours)', file=sys.stderr)
    return palette


def _run(args: argparse.Namespace, settings: Settings) -> str | None:
    palette = _palette(args, settings)
    colors = [resolve(value, palette) for value in args.colors]

    if args.command == 'parse':
        report = Report(title='parse')
        for value, color in zip(args.colors, colors):
            report.add(value, color)
    elif args.command == 'mix':
        combine = (lambda a, b: a.add(b)) if args.mode == 'add' else (lambda a, b: a.mul(b))
        result = reduce(combine, colors).scale(args.scale)
        report = Report(title=f'mix ({args.mode}, scale {args.scale:g})')
        report.add(' '.join(args.colors), result)
    else:
        size = args.size if args.size is not None else settings.swatch_size
        out = save_swatch(args.out, colors, size)
        print(f'hdrcolor: wrote {out} ({len(colors)} colours, {size}px)', file=sys.stderr)
        return None

    return format_json(report) if args.json else format_text(report)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Load .env before anything else; OS env vars always win
    settings, env_path = load_settings(env_file=args.env_file)
    if env_path:
        print(f'hdrcolor: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        output = _run(args, settings)
    except (ValueError, OSError) as err:
        # ColorError and PaletteError are ValueErrors
        print(f'Error: {err}', file=sys.stderr)
        sys.exit(1)

    if output is not None:
        print(output)


if __name__ == '__main__':
    main()
