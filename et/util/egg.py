"""Egg shape and colour math, kept free of Qt so it can be tested headless."""

import math

# Raw (uncooked) egg colour. Green and blue drain out as the egg cooks, ending at pure red.
RAW_RGB = (255, 239, 174)


def egg_outline(a=110.0, b=150.0, d=20.0, steps=360):
    """Points on the egg curve, one per degree by default, centred on (0, 0).

    x = a*cos(t), y = -(sqrt(b^2 - d^2*cos^2(t)) + d*sin(t)) * sin(t)

    ``a`` is the half-width, ``b`` the half-height and ``d`` how much the
    shape leans towards the pointy end.  The first and last points coincide
    so the outline is closed.  Screen coordinates, so y grows downwards and
    the pointy end is on top.
    """
    points = []
    for i in range(steps + 1):
        rad = i / steps * 2 * math.pi
        cos_t = math.cos(rad)
        sin_t = math.sin(rad)
        x = a * cos_t
        y = -(math.sqrt(b * b - d * d * cos_t * cos_t) + d * sin_t) * sin_t
        points.append((x, y))
    return points


def egg_fill_rgb(progress):
    """Fill colour for the egg at the given progress, as an (r, g, b) tuple."""
    p = min(1.0, max(0.0, progress))
    r, g, b = RAW_RGB
    return r, int(g * (1 - p)), int(b * (1 - p))
