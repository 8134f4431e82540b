"""Command line front end: remove cap triangles from an OBJ mesh.

Examples:
  holecap scan.obj -o scan_open.obj              # default threshold L=2.5
  holecap scan.obj -o scan_open.obj -L 3 --vtk caps.vtk
  holecap scan.obj -o scan_open.obj --plot caps.png --log-level DEBUG
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

import numpy as np

from .core.caps import detect_caps
from .core.config import CapRemovalConfig
from .core.constants import DEFAULT_THRESHOLD
from .core.diagnostics import count_boundary_loops
from .core.errors import HolecapError
from .core.io import read_obj, write_obj, write_vtk
from .core.logging_utils import configure_logging, get_logger

logger = get_logger('holecap.cli')


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='holecap', description='Detect and remove cap triangles that close holes in a raw triangulation.')
    p.add_argument('input', help='Input Wavefront OBJ mesh')
    p.add_argument('-o', '--output', required=True, help='Output OBJ path for the cleaned mesh')
    p.add_argument('-L', '--threshold', type=float, default=DEFAULT_THRESHOLD,
                   help=f'Border threshold on the max/min incident length ratio (default: {DEFAULT_THRESHOLD})')
    p.add_argument('--vtk', default=None, help='Also write the input mesh with border/cap fields to this VTK file')
    p.add_argument('--plot', default=None, help='Render the detection to this image file')
    p.add_argument('--stats-json', default=None, help='Write run statistics as JSON to this file')
    p.add_argument('--log-level', default='INFO', help='Logging level (default: INFO)')
    return p


def _write_outputs(args, cfg, points, triangles, det) -> None:
    write_obj(args.output, points, det.triangles,
              header=f"holecap: {det.stats.summary()}")
    logger.info('wrote %s (%d boundary loop(s))', args.output, count_boundary_loops(det.triangles))
    if args.vtk:
        write_vtk(args.vtk, points, triangles,
                  point_data={'border': det.is_border, 'ratio': np.nan_to_num(det.ratios, nan=0.0)},
                  cell_data={'cap': det.cap_mask, 'length': det.lengths},
                  title='holecap cap detection')
        logger.info('wrote %s', args.vtk)
    if args.plot:
        from .core.visualization import plot_cap_detection
        plot_cap_detection(det, outname=args.plot)
        logger.info('wrote %s', args.plot)
    if args.stats_json:
        payload = dict(det.stats.to_dict(), config=cfg.to_dict())
        with open(args.stats_json, 'w') as f:
            json.dump(payload, f, indent=2)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    cfg = CapRemovalConfig(threshold=args.threshold)
    try:
        points, triangles = read_obj(args.input)
        det = detect_caps(points, triangles, config=cfg)
    except (OSError, HolecapError) as e:
        logger.error('%s', e)
        return 2

    try:
        _write_outputs(args, cfg, points, triangles, det)
    except (OSError, ValueError) as e:
        logger.error('could not write outputs: %s', e)
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
