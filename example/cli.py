import argparse
import logging
import time
from pathlib import Path

import numpy as np
from PIL import Image

import gridcarve

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('src', type=str)
    parser.add_argument('-o', dest='dst', type=str, default='a.png')
    parser.add_argument('--dw', type=int, default=0)
    parser.add_argument('--dh', type=int, default=0)
    parser.add_argument('--edges', type=str, default=gridcarve.WRAP_EDGES,
                        choices=[gridcarve.WRAP_EDGES, gridcarve.CLAMP_EDGES])
    parser.add_argument('--debug', type=str, default=None,
                        help='save the carved seams painted over the output')
    parser.add_argument('--energy', type=str, default=None,
                        help='save the energy map of the source image')
    parser.add_argument('--log-level', type=str, default='INFO')
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(),
                                      logging.INFO),
                        format='%(asctime)s %(name)s %(levelname)s '
                               '%(message)s')

    try:
        logger.info('Loading source image from {}'.format(args.src))
        src = np.array(Image.open(args.src).convert('RGBA'))

        if args.energy is not None:
            logger.info('Saving energy map to {}'.format(args.energy))
            energy = gridcarve.energy_image(src, edge_mode=args.edges)
            Path(args.energy).parent.mkdir(parents=True, exist_ok=True)
            Image.fromarray(energy).save(args.energy)

        logger.info('Performing seam carving...')
        start = time.time()
        src_h, src_w, _ = src.shape
        carver = gridcarve.Carver(src, edge_mode=args.edges)
        dst = carver.resize(src_w + args.dw, src_h + args.dh)
        logger.info('Done at {:.4f} second(s)'.format(time.time() - start))

        logger.info('Saving output image to {}'.format(args.dst))
        Path(args.dst).parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(dst).save(args.dst)

        if args.debug is not None:
            logger.info('Saving debug image to {}'.format(args.debug))
            debug = gridcarve.draw_debug_points(dst, carver.debug_points())
            Path(args.debug).parent.mkdir(parents=True, exist_ok=True)
            Image.fromarray(debug).save(args.debug)
    except Exception as e:
        logger.error(e)
        exit(1)


if __name__ == "__main__":
    main()
