import math

import pygame

from lander import SHIP_SIZE, game_state


COLORS = {
    "bg": (0, 0, 0),
    "ship": (255, 255, 255),
    "target": (255, 255, 255),
    "flame_fill": (255, 0, 0),
    "flame_edge": (255, 255, 0),
    "ui": (255, 255, 255),
}

EXPLOSION_RINGS = [
    (1.7, (139, 0, 0)),
    (1.4, (255, 0, 0)),
    (1.1, (255, 165, 0)),
    (0.8, (255, 255, 0)),
    (0.5, (255, 255, 255)),
]

HUD_FONT_SIZE = 25
INFO_FONT_SIZE = 28
HUD_MARGIN = 15
HUD_RIGHT_COLUMN = 150
LINE_WIDTH = max(1, round(SHIP_SIZE / 20))
FLAME_WIDTH = max(1, round(SHIP_SIZE / 10))

INSTRUCTIONS = [
    (0, "Welcome to Lunar Lander!"),
    (50, "You must try to land on top of the target"),
    (100, "Don't hit the ground or land faster than a speed of 3 px/s"),
    (150, "Lastly, watch your fuel! Good Luck!"),
    (250, "Use 'Space' to thrust and the right/left arrow keys to rotate"),
    (300, "Hit 'Enter' to begin"),
]


def ship_points(ship):
    x, y = ship["pos"].x, ship["pos"].y
    r = ship["r"]
    cos_a = math.cos(ship["angle"])
    sin_a = math.sin(ship["angle"])
    return [
        (x + 4 / 3 * r * cos_a, y - 4 / 3 * r * sin_a),  # nose
        (x - r * (2 / 3 * cos_a + sin_a), y + r * (2 / 3 * sin_a - cos_a)),
        (x - r * (2 / 3 * cos_a - sin_a), y + r * (2 / 3 * sin_a + cos_a)),
    ]


def flame_points(ship):
    x, y = ship["pos"].x, ship["pos"].y
    r = ship["r"]
    cos_a = math.cos(ship["angle"])
    sin_a = math.sin(ship["angle"])
    return [
        (x - r * (2 / 3 * cos_a + 0.5 * sin_a), y + r * (2 / 3 * sin_a - 0.5 * cos_a)),
        (x - r * 5 / 3 * cos_a, y + r * 5 / 3 * sin_a),
        (x - r * (2 / 3 * cos_a - 0.5 * sin_a), y + r * (2 / 3 * sin_a + 0.5 * cos_a)),
    ]


def target_points(target):
    x, y = target["pos"].x, target["pos"].y
    w, h = target["width"], target["height"]
    return [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]


def hud_lines(session):
    ship = session["ship"]
    right = session["width"] - HUD_RIGHT_COLUMN
    return [
        (f"vertical speed: {-int(ship['vel'].y)}", (HUD_MARGIN, 40)),
        (f"fuel: {int(ship['fuel'] / 2.5)}%", (HUD_MARGIN, 70)),
        (f"lives: {ship['lives']}", (HUD_MARGIN, 100)),
        (f"top score: {session['top_score']}", (right, 40)),
        (f"score: {session['score']}", (right, 70)),
    ]


def text(value, pos, size=HUD_FONT_SIZE):
    return {"kind": "text", "text": value, "pos": pos, "size": size, "color": COLORS["ui"]}


def build_frame(session):
    shapes = [text(value, pos) for value, pos in hud_lines(session)]
    state = game_state(session)
    ship = session["ship"]

    if state == "idle":
        mid = session["height"] / 2
        for offset, line in INSTRUCTIONS:
            shapes.append(text(line, (HUD_MARGIN, mid + offset), INFO_FONT_SIZE))
    elif state == "exploding":
        for scale, color in EXPLOSION_RINGS:
            shapes.append({"kind": "circle", "center": (ship["pos"].x, ship["pos"].y), "radius": ship["r"] * scale, "color": color})
    else:
        if session["flame"]:
            shapes.append(
                {
                    "kind": "polygon",
                    "points": flame_points(ship),
                    "color": COLORS["flame_fill"],
                    "edge": COLORS["flame_edge"],
                    "width": FLAME_WIDTH,
                }
            )
        shapes.append({"kind": "lines", "points": ship_points(ship), "color": COLORS["ship"], "width": LINE_WIDTH})
        shapes.append(
            {"kind": "lines", "points": target_points(session["target"]), "color": COLORS["target"], "width": LINE_WIDTH}
        )
    return shapes


def load_fonts():
    return {
        HUD_FONT_SIZE: pygame.font.SysFont("Arial", HUD_FONT_SIZE),
        INFO_FONT_SIZE: pygame.font.SysFont("Arial", INFO_FONT_SIZE),
    }


def draw_frame(surface, frame, fonts):
    surface.fill(COLORS["bg"])
    for shape in frame:
        kind = shape["kind"]
        if kind == "lines":
            pygame.draw.lines(surface, shape["color"], True, shape["points"], shape["width"])
        elif kind == "polygon":
            pygame.draw.polygon(surface, shape["color"], shape["points"])
            pygame.draw.polygon(surface, shape["edge"], shape["points"], shape["width"])
        elif kind == "circle":
            pygame.draw.circle(surface, shape["color"], shape["center"], max(1, int(shape["radius"])))
        elif kind == "text":
            rendered = fonts[shape["size"]].render(shape["text"], True, shape["color"])
            # positions are text baselines
            x, y = shape["pos"]
            surface.blit(rendered, (x, y - rendered.get_height()))
        else:
            raise ValueError(f"unknown shape kind: {kind!r}")
