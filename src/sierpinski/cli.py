"""
Render a Sierpinski triangle with the chaos game and save it as a PNG.

usage:
    sierpinski -s 512                      # 4,000,000 points into ./
    sierpinski -s 1024 -q 10000000 -d out --seed 7 --workers 4
"""

import argparse
import logging
import sys

from sierpinski import __version__, config
from sierpinski.canvas import POLICIES
from sierpinski.errors import SierpinskiError
from sierpinski.geometry import SHAPES
from sierpinski.log import configure_logging
from sierpinski.io.image_sink import output_path, write_image
from sierpinski.render import render

logger = logging.getLogger(__name__)

_DEFAULTS = config.RENDER_DEFAULTS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='sierpinski',
                                     description='Generate a Sierpinski triangle with the chaos game')
    parser.add_argument('-s', '--size', type=int, required=True,
                        help='Width and height of the image in pixels')
    parser.add_argument('-q', '--quality', type=int, default=_DEFAULTS['quality'],
                        help='Number of points to plot (default: %(default)s)')
    parser.add_argument('-d', '--output-directory', dest='output_directory',
                        default=_DEFAULTS['output_directory'],
                        help='Directory the PNG is written to (default: %(default)s)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for the random generator (default: fresh entropy)')
    parser.add_argument('--warmup', type=int, default=_DEFAULTS['warmup'],
                        help='Iterations discarded before plotting (default: %(default)s)')
    parser.add_argument('--workers', type=int, default=_DEFAULTS['workers'],
                        help='Independent sampler threads (default: %(default)s)')
    parser.add_argument('--policy', choices=POLICIES, default=_DEFAULTS['policy'],
                        help='How hit counts become colours (default: %(default)s)')
    parser.add_argument('--shape', choices=SHAPES, default=_DEFAULTS['shape'],
                        help='Triangle layout (default: %(default)s)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        path = output_path(args.output_directory, args.size, args.quality)
        logger.info('[1/3] Generating fractal...')
        pixels = render(args.size, args.quality, seed=args.seed, warmup=args.warmup,
                        workers=args.workers, policy=args.policy, shape=args.shape)
        logger.info('[2/3] Saving file...')
        write_image(pixels, path)
    except SierpinskiError as exc:
        logger.error('%s', exc)
        logger.debug('run aborted', exc_info=True)
        return 1
    logger.info('[3/3] Saved to: %s', path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
