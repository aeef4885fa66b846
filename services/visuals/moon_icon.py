"""SVG moon icons.

The terminator is drawn as a white circle inside an SVG mask, squashed
horizontally by ``1 - |2p - 1|`` and shifted sideways, in the direction of
the sign of ``2p - 1``, by 0.65 of the radius. The mask reveals a gradient-filled disc over a dark
base disc.
"""

from __future__ import annotations

import hashlib

DEFAULT_SIZE = 160
TERMINATOR_SHIFT = 0.65


def _num(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def icon_id(phase: float, size: float, scope: str = "") -> str:
    """Deterministic id used to scope the icon's <defs>."""
    digest = hashlib.sha1(f"{phase!r}|{size!r}|{scope}".encode("utf-8")).hexdigest()
    return f"m{digest[:12]}"


def terminator_geometry(phase: float, size: float = DEFAULT_SIZE) -> dict:
    r = size / 2
    x = 2 * phase - 1
    direction = 1 if x >= 0 else -1
    return {
        "radius": r,
        "scale_x": 1 - abs(x),
        "direction": direction,
        "shift": direction * r * TERMINATOR_SHIFT,
    }


def build_icon(phase: float, size: float = DEFAULT_SIZE, scope: str = "") -> str:
    if size is None:
        size = DEFAULT_SIZE
    if size <= 0:
        raise ValueError(f"icon size must be positive, got {size!r}")

    geo = terminator_geometry(phase, size)
    r = geo["radius"]
    uid = icon_id(phase, size, scope)
    s = _num(size)
    rr = _num(r)

    return f"""
  <svg viewBox="0 0 {s} {s}" width="{s}" height="{s}" class="moonSVG" aria-label="Moon icon" xmlns="http://www.w3.org/2000/svg">
    <defs>
      <radialGradient id="g-{uid}" cx="35%" cy="30%" r="75%">
        <stop offset="0%" stop-color="#f8fbff"/>
        <stop offset="60%" stop-color="#e6ebff"/>
        <stop offset="100%" stop-color="#c7d2ff"/>
      </radialGradient>
      <filter id="shadow-{uid}" x="-50%" y="-50%" width="200%" height="200%">
        <feDropShadow dx="0" dy="2" stdDeviation="4" flood-color="#000" flood-opacity="0.6"/>
      </filter>
      <clipPath id="clip-{uid}">
        <circle cx="{rr}" cy="{rr}" r="{rr}" />
      </clipPath>
      <mask id="mask-{uid}">
        <rect width="100%" height="100%" fill="black"/>
        <g transform="translate({_num(r + geo['shift'])}, {rr}) scale({_num(geo['scale_x'])}, 1)">
          <circle cx="0" cy="0" r="{rr}" fill="white" />
        </g>
      </mask>
    </defs>
    <circle cx="{rr}" cy="{rr}" r="{rr}" fill="#0a0f22" stroke="#1c2752" stroke-width="2" filter="url(#shadow-{uid})"/>
    <g clip-path="url(#clip-{uid})" mask="url(#mask-{uid})">
      <circle cx="{rr}" cy="{rr}" r="{rr}" fill="url(#g-{uid})"/>
    </g>
    <circle cx="{rr}" cy="{rr}" r="{_num(r - 1.5)}" fill="none" stroke="rgba(255,255,255,.06)" stroke-width="3"/>
  </svg>"""
