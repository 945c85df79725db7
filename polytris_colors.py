"""Per-session colour map: one HSL colour per piece type"""
import random
from typing import Dict, Iterable

import pygame

from polytris_config import COLOR_LIGHTNESS, COLOR_SATURATION, HUE_ATTEMPTS, HUE_MIN_DISTANCE


def hue_distance(a: float, b: float) -> float:
    d = abs(a - b) % 360
    return min(d, 360 - d)


def pick_hue(used: Iterable[float], rng: random.Random,
             min_distance: float = HUE_MIN_DISTANCE, attempts: int = HUE_ATTEMPTS) -> float:
    """Random hue away from *used*; the last draw wins if every attempt is too close."""
    used = list(used)
    hue = rng.random() * 360
    for _ in range(attempts - 1):
        if all(hue_distance(hue, u) >= min_distance for u in used):
            break
        hue = rng.random() * 360
    return hue


def assign_colors(types: Iterable[int], rng: random.Random) -> Dict[int, pygame.Color]:
    colors: Dict[int, pygame.Color] = {}
    hues = []
    for t in types:
        h = pick_hue(hues, rng)
        hues.append(h)
        c = pygame.Color(0, 0, 0)
        c.hsla = (h, COLOR_SATURATION, COLOR_LIGHTNESS, 100)
        colors[t] = c
    return colors
