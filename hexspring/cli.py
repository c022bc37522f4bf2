# hexspring/cli.py
"""
Command-line entry point: relax a .hex mesh and write the wireframe.

    hexspring --mesh sphere.hex --bc input1.txt --out sphere.obj
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import DEFAULT_CONFIG
from .errors import HexSpringError
from .io import read_boundary_conditions, read_hex_mesh, write_obj
from .logging_config import setup_logging
from .simulation import MassSpringSystem

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='hexspring',
        description='Relax a hexahedral mesh with a damped mass-spring model',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hexspring --mesh sphere.hex --bc input1.txt --out sphere.obj
  hexspring --mesh block.hex --bc pull.txt --iterations 500 --csv results.csv --html block.html

Boundary-condition file: fixed count, fixed ids, displaced count, displaced ids
(all ids 1-based). With no fixed ids, every vertex with fewer than 6 springs is pinned.
        """
    )

    parser.add_argument('--mesh', default='sphere.hex', help='Input .hex mesh (default: sphere.hex)')
    parser.add_argument('--bc', default='input1.txt', help='Boundary-condition file (default: input1.txt)')
    parser.add_argument('--out', default='sphere.obj', help='Output .obj wireframe (default: sphere.obj)')
    parser.add_argument('--csv', default=None, help='Also write per-vertex results as CSV')
    parser.add_argument('--html', default=None, help='Also write an interactive 3D view as HTML')

    physics = parser.add_argument_group('simulation parameters')
    physics.add_argument('--iterations', type=int, default=None,
                         help=f'Number of time steps (default: {DEFAULT_CONFIG.iterations})')
    physics.add_argument('--timestep', type=float, default=None,
                         help=f'Time step (default: {DEFAULT_CONFIG.timestep})')
    physics.add_argument('--mass', type=float, default=None,
                         help=f'Mass of each vertex (default: {DEFAULT_CONFIG.point_mass})')
    physics.add_argument('--stiffness', type=float, default=None,
                         help=f'Spring constant (default: {DEFAULT_CONFIG.spring_k})')
    physics.add_argument('--damping', type=float, default=None,
                         help=f'Damping constant (default: {DEFAULT_CONFIG.damping})')
    physics.add_argument('--pull', type=float, nargs=3, default=None, metavar=('DX', 'DY', 'DZ'),
                         help='Offset applied to displaced vertices (default: 0.2 0 0)')
    physics.add_argument('--tol', type=float, default=None,
                         help='Stop early once no vertex moves more than this in one step')

    parser.add_argument('--progress', action='store_true', help='Show a progress bar')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    parser.add_argument('--log-file', default=None, help='Also write the run log to this file')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)

    try:
        config = DEFAULT_CONFIG.with_overrides(
            iterations=args.iterations,
            timestep=args.timestep,
            point_mass=args.mass,
            spring_k=args.stiffness,
            damping=args.damping,
            pull_offset=args.pull,
            convergence_tol=args.tol,
        )
    except ValueError as e:
        parser.error(str(e))

    try:
        mesh = read_hex_mesh(args.mesh)
        bc = read_boundary_conditions(args.bc)

        system = MassSpringSystem.from_mesh(mesh, config)
        system.apply(bc)
        result = system.run(progress=args.progress)

        write_obj(args.out, system.positions(), system.edges())

        if args.csv:
            from .post import results_frame
            results_frame(system).to_csv(args.csv, index=False)
            logger.info("Results table saved to %s", args.csv)

        if args.html:
            from .viz import plot_wireframe
            plot_wireframe(
                system.positions(), system.edges(),
                outpath=args.html, show=False,
                fixed=system.fixed_mask(), initial=system.initial_positions(),
                title=f"{args.mesh} after {result.iterations} steps",
            )
    except OSError as e:
        logger.error("There was a problem opening a file: %s", e)
        return 1
    except HexSpringError as e:
        logger.error("Invalid input: %s", e)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
