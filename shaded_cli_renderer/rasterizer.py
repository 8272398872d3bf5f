#
# PROJECT: shaded-cli-renderer
# MODULE: shaded_cli_renderer/rasterizer.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math


def fill_triangle(canvas, p1, p2, p3, color):
    """
    Scanline-fills a triangle with a solid color.
    p1, p2, p3 are (x, y) pixel coordinates; a pixel is covered when its
    center lies inside the triangle (top-left style half-open spans).
    """
    # Sort vertices by Y
    if p1[1] > p2[1]: p1, p2 = p2, p1
    if p1[1] > p3[1]: p1, p3 = p3, p1
    if p2[1] > p3[1]: p2, p3 = p3, p2

    x1, y1 = float(p1[0]), float(p1[1])
    x2, y2 = float(p2[0]), float(p2[1])
    x3, y3 = float(p3[0]), float(p3[1])

    if y3 <= y1:
        return  # zero height

    w, h = canvas.w, canvas.h
    rows = canvas.pixels

    y_start = max(0, math.ceil(y1 - 0.5))
    y_end = min(h, math.ceil(y3 - 0.5))

    inv_long = 1.0 / (y3 - y1)
    for y in range(y_start, y_end):
        yc = y + 0.5
        xa = x1 + (x3 - x1) * (yc - y1) * inv_long
        # Top half walks p1->p2, bottom half p2->p3
        if yc < y2:
            xb = x1 + (x2 - x1) * (yc - y1) / (y2 - y1)
        else:
            xb = x2 + (x3 - x2) * (yc - y2) / (y3 - y2)
        if xa > xb:
            xa, xb = xb, xa

        sx = max(0, math.ceil(xa - 0.5))
        ex = min(w, math.ceil(xb - 0.5))
        if ex > sx:
            rows[y][sx:ex] = [color] * (ex - sx)


def draw_line_dda(canvas, p1, p2, color):
    """Draws a line using the DDA algorithm."""
    x1, y1 = float(p1[0]), float(p1[1])
    x2, y2 = float(p2[0]), float(p2[1])

    w, h = canvas.w, canvas.h
    # Entirely off one side of the canvas
    if (x1 < 0 and x2 < 0) or (y1 < 0 and y2 < 0) or \
            (x1 >= w and x2 >= w) or (y1 >= h and y2 >= h):
        return

    dx = x2 - x1
    dy = y2 - y1
    step = max(abs(dx), abs(dy))
    if step < 1.0:
        canvas.set_pixel(math.floor(x1), math.floor(y1), color)
        return

    x_inc = dx / step
    y_inc = dy / step

    cx, cy = x1, y1
    for _ in range(int(step) + 1):
        canvas.set_pixel(math.floor(cx), math.floor(cy), color)
        cx += x_inc; cy += y_inc
