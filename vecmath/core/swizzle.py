from __future__ import annotations

from functools import lru_cache

from vecmath.config import SWIZZLE_FIELDS, SWIZZLE_LITERALS, SWIZZLE_MAX_LEN
from vecmath.exceptions import SwizzleError

_SELECTOR_CHARS = frozenset(SWIZZLE_FIELDS) | frozenset(SWIZZLE_LITERALS)


def is_selector(name: str) -> bool:
    """True if name is made only of selector characters and has a valid length.

    Arity is not checked here; see parse_selector.
    """
    return 1 <= len(name) <= SWIZZLE_MAX_LEN and all(c in _SELECTOR_CHARS for c in name)


@lru_cache(maxsize=None)
def parse_selector(selector: str, arity: int) -> tuple[tuple[bool, int], ...]:
    """Validate a selector against the source arity.

    Returns one (is_field, value) pair per output component: a field index
    into the source vector when is_field is True, otherwise the literal.
    """
    if len(selector) == 0:
        raise SwizzleError("swizzle selector must contain at least one component", selector, arity)
    if len(selector) > SWIZZLE_MAX_LEN:
        raise SwizzleError(
            f"swizzle selector {selector!r} has {len(selector)} components, at most {SWIZZLE_MAX_LEN} allowed",
            selector,
            arity,
        )

    picks: list[tuple[bool, int]] = []
    for c in selector:
        if c in SWIZZLE_LITERALS:
            picks.append((False, SWIZZLE_LITERALS[c]))
            continue
        idx = SWIZZLE_FIELDS.find(c)
        if idx < 0:
            raise SwizzleError(f"invalid component {c!r} in swizzle selector {selector!r}", selector, arity)
        if idx >= arity:
            raise SwizzleError(
                f"component {c!r} in swizzle selector {selector!r} is out of range for vec{arity}",
                selector,
                arity,
            )
        picks.append((True, idx))
    return tuple(picks)


def swizzle(vec, selector: str):
    """Select and reorder the components of vec.

    The selector length decides the result: 1 -> scalar, 2 -> Vec2,
    3 -> Vec3, 4 -> Vec4, all of vec's scalar type. ``0`` and ``1`` inject
    literals. ``vec4(1, 2, 3, 4).swizzle("wzyx") == vec4(4, 3, 2, 1)``.
    """
    if not isinstance(selector, str):
        raise TypeError(f"swizzle selector must be a str, got {type(selector).__name__}")

    picks = parse_selector(selector, len(vec))
    comps = tuple(vec)
    real = vec._real
    values = [comps[v] if is_field else real(v) for is_field, v in picks]
    if len(values) == 1:
        return values[0]
    return vec._space.vector_type(len(values))(*values)
