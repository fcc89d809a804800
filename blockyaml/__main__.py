"""``python -m blockyaml [FILE]``: check that a YAML file parses."""

import argparse
import json
import logging
import sys

from blockyaml import ParseError, ParserConfig, parse


def build_parser():
    ap = argparse.ArgumentParser(prog='blockyaml', description='Parse a block YAML document.')
    ap.add_argument('path', nargs='?', help='file to read (default: stdin)')
    ap.add_argument('-v', '--verbose', action='store_true', help='log parser activity to stderr')
    ap.add_argument('--dump', action='store_true', help='print the parsed value as JSON')
    ap.add_argument('--max-depth', type=int, help='override the nesting limit')
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    overrides = {}
    if args.max_depth is not None:
        overrides['max_depth'] = args.max_depth
    config = ParserConfig(**overrides)

    if args.path:
        with open(args.path, 'rb') as f:
            raw = f.read()
    else:
        raw = sys.stdin.buffer.read()

    try:
        value = parse(raw, config)
    except ParseError as e:
        print(f'FAIL @{e.lineno}: {e}', file=sys.stderr)
        return 1

    print(f'OK: {type(value).__name__}')
    if args.dump:
        print(json.dumps(value, indent=2, default=str))
    return 0


if __name__ == '__main__':
    sys.exit(main())
