from __future__ import annotations

import numpy as np

# App
APP_VERSION = "0.4.1"

# Scalar types
DEFAULT_REAL = "f32"
REAL_ALIASES = {
    "f16": np.float16,
    "f32": np.float32,
    "f64": np.float64,
    "i32": np.int32,
    "i64": np.int64,
}

# Numerics
INVERT_EPSILON = 1e-8  # |det| below this -> no inverse
PERSPECTIVE_ASPECT_EPSILON = 0.001  # known pathological aspect for create_perspective

# Swizzle
SWIZZLE_MAX_LEN = 4
SWIZZLE_FIELDS = "xyzw"
SWIZZLE_LITERALS = {"0": 0, "1": 1}

# Text format (debugging aid, not machine-parsable)
FORMAT_PRECISION = 2

# CLI camera defaults
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FOV_DEG = 70.0
NEAR = 0.1
FAR = 800.0
DEFAULT_EYE = (0.0, 15.0, 0.0)
DEFAULT_TARGET = (0.0, 7.0, 60.0)  # look_ahead=60, look_down=8
DEFAULT_UP = (0.0, 1.0, 0.0)
