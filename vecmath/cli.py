from __future__ import annotations

import argparse
import logging
from typing import Sequence

import numpy as np

from vecmath.config import (
    APP_VERSION,
    DEFAULT_EYE,
    DEFAULT_REAL,
    DEFAULT_TARGET,
    DEFAULT_UP,
    FAR,
    FOV_DEG,
    NEAR,
    REAL_ALIASES,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
)
from vecmath.generic import specialize_on
from vecmath.util.math import to_radians

logger = logging.getLogger(__name__)

# trig and inversion need a floating scalar type
_FLOAT_REALS = sorted(k for k, v in REAL_ALIASES.items() if np.dtype(v).kind == "f")


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="vecmath", description=f"Print camera and projection matrices (vecmath v{APP_VERSION})")
    p.add_argument("--real", choices=_FLOAT_REALS, default=DEFAULT_REAL, help="scalar type (default: f32)")
    p.add_argument("--eye", type=float, nargs=3, default=list(DEFAULT_EYE), metavar=("X", "Y", "Z"), help="camera position")
    p.add_argument("--target", type=float, nargs=3, default=list(DEFAULT_TARGET), metavar=("X", "Y", "Z"), help="point the camera looks at")
    p.add_argument("--up", type=float, nargs=3, default=list(DEFAULT_UP), metavar=("X", "Y", "Z"), help="screen-up direction")
    p.add_argument("--fov", type=float, default=FOV_DEG, help="vertical field of view in degrees (default: 70)")
    p.add_argument(
        "--aspect",
        type=float,
        default=WINDOW_WIDTH / WINDOW_HEIGHT,
        help="aspect ratio width / height (default: 1280/720)",
    )
    p.add_argument("--near", type=float, default=NEAR, help="near clip plane distance")
    p.add_argument("--far", type=float, default=FAR, help="far clip plane distance")
    p.add_argument(
        "--ortho",
        type=float,
        default=None,
        metavar="HALF_HEIGHT",
        help="orthographic projection with this half height instead of perspective",
    )
    p.add_argument("--debug", action="store_true", help="enable debug logs")
    return p.parse_args(argv)


def run(args: argparse.Namespace) -> list[str]:
    """Build the matrices described by args and return the printable lines."""
    space = specialize_on(REAL_ALIASES[args.real])
    Mat4 = space.Mat4

    eye = space.vec3(*args.eye)
    target = space.vec3(*args.target)
    up = space.vec3(*args.up)
    view = Mat4.create_look_at(eye, target, up)

    if args.ortho is not None:
        half_h = float(args.ortho)
        half_w = half_h * float(args.aspect)
        proj = Mat4.create_orthogonal(-half_w, half_w, -half_h, half_h, float(args.near), float(args.far))
    else:
        proj = Mat4.create_perspective(to_radians(float(args.fov)), float(args.aspect), float(args.near), float(args.far))

    view_proj = view.mul(proj)
    inverse = view_proj.invert()
    logger.debug("view_proj det=%g", float(view_proj.determinant()))

    return [
        f"view:      {view.format()}",
        f"proj:      {proj.format()}",
        f"view_proj: {view_proj.format()}",
        f"inverse:   {inverse.format() if inverse is not None else 'singular'}",
    ]


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="[vecmath] %(levelname)s %(name)s: %(message)s",
    )
    for line in run(args):
        print(line)


if __name__ == "__main__":
    main()
