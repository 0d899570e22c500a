import logging
import math
import random
import time

import pygame


logger = logging.getLogger(__name__)

WIDTH = 1024
HEIGHT = 768
FPS = 30

FRICTION = 0.6  # 0 = none, 1 = lots
GRAVITY = 4  # px/s^2 while falling
SHIP_SIZE = 30
SHIP_THRUST = 6  # px/s^2
TURN_SPEED = 360  # degrees/sec
SHIP_FUEL = 250
SHIP_EXPLODE_DUR = 0.3  # seconds
LIVES = 3
MAX_SPEED = 3  # max landing speed per axis

SPAWN_X = 15
SPAWN_ANGLE = math.pi / 2

TARGET_MIN_SIZE = 20
TARGET_SIZE_RANGE = 100

DRIFT_X_SCORE = 4
DRIFT_Y_SCORE = 7
THRUST_UP_EVERY = 6

INPUTS = (
    "start",
    "thrust-on",
    "thrust-off",
    "rotate-left-on",
    "rotate-left-off",
    "rotate-right-on",
    "rotate-right-off",
)


def seed_from_time():
    return int(time.time()) & 0xFFFFFFFF


def random_direction(rng):
    # sum of two +/-1 draws: -2, 0 or 2
    return (rng.randint(0, 1) * 2 - 1) + (rng.randint(0, 1) * 2 - 1)


def new_ship(height):
    return {
        "pos": pygame.Vector2(SPAWN_X, height / 2),
        "r": SHIP_SIZE / 2,
        "angle": SPAWN_ANGLE,
        "rot": 0.0,
        "thrust_speed": SHIP_THRUST,
        "thrusting": False,
        "vel": pygame.Vector2(0, 0),
        "fuel": SHIP_FUEL,
        "lives": LIVES,
        "explode_time": 0,
    }


def reset_ship(ship, height):
    ship["pos"] = pygame.Vector2(SPAWN_X, height / 2)
    ship["angle"] = SPAWN_ANGLE
    ship["rot"] = 0.0
    ship["thrusting"] = False
    ship["vel"] = pygame.Vector2(0, 0)
    ship["fuel"] = SHIP_FUEL
    ship["explode_time"] = 0


def new_target(rng, width, height):
    return {
        "pos": pygame.Vector2(rng.random() * width, rng.random() * (height / 2) + height / 2),
        "width": rng.random() * TARGET_SIZE_RANGE + TARGET_MIN_SIZE,
        "height": rng.random() * TARGET_SIZE_RANGE + TARGET_MIN_SIZE,
        "direction_x": random_direction(rng),
        "direction_y": random_direction(rng),
    }


def new_session(width=WIDTH, height=HEIGHT, fps=FPS, seed=None, top_score=0):
    if seed is None:
        seed = seed_from_time()
    rng = random.Random(seed)
    return {
        "width": width,
        "height": height,
        "fps": fps,
        "seed": seed,
        "rng": rng,
        "ship": new_ship(height),
        "target": new_target(rng, width, height),
        "score": 0,
        "top_score": top_score,
        "playing": False,
        "flame": False,
    }


def game_state(session):
    if not session["playing"]:
        return "idle"
    if session["ship"]["explode_time"] > 0:
        return "exploding"
    return "flying"


def apply_input(session, name):
    ship = session["ship"]
    turn = TURN_SPEED / 180 * math.pi / session["fps"]
    if name == "start":
        session["playing"] = True
    elif name == "thrust-on":
        ship["thrusting"] = True
    elif name == "thrust-off":
        ship["thrusting"] = False
    elif name == "rotate-left-on":
        ship["rot"] = turn
    elif name == "rotate-right-on":
        ship["rot"] = -turn
    elif name in ("rotate-left-off", "rotate-right-off"):
        ship["rot"] = 0.0
    else:
        raise ValueError(f"unknown input: {name!r}")


def overlaps_target_x(ship, target):
    x = ship["pos"].x
    r = ship["r"]
    return x + r > target["pos"].x and x - r < target["pos"].x + target["width"]


def touches_target_top(ship, target, height):
    y = ship["pos"].y
    top = target["pos"].y
    return y + ship["r"] >= top and y < top and overlaps_target_x(ship, target)


def below_ground(ship, target, height):
    return ship["pos"].y + ship["r"] > height


def hits_target_body(ship, target, height):
    y = ship["pos"].y
    r = ship["r"]
    top = target["pos"].y
    return overlaps_target_x(ship, target) and y + r > top and y - r < top + target["height"]


# Evaluated in order, first match wins.
COLLISION_CHECKS = [
    ("landing", touches_target_top),
    ("ground", below_ground),
    ("target_body", hits_target_body),
]


def classify_collision(ship, target, height):
    for name, check in COLLISION_CHECKS:
        if check(ship, target, height):
            return name
    return None


def is_safe_landing(ship):
    vel = ship["vel"]
    return vel.y < MAX_SPEED and vel.x < MAX_SPEED and ship["explode_time"] <= 0


def explode_ship(session):
    ship = session["ship"]
    ship["explode_time"] = math.ceil(SHIP_EXPLODE_DUR * session["fps"])
    ship["vel"] = pygame.Vector2(0, 0)
    logger.debug("ship exploded at (%.1f, %.1f), lives=%d", ship["pos"].x, ship["pos"].y, ship["lives"])


def land_ship(session):
    ship = session["ship"]
    session["score"] += 1
    reset_ship(ship, session["height"])
    session["target"] = new_target(session["rng"], session["width"], session["height"])
    if session["score"] % THRUST_UP_EVERY == 0:
        ship["thrust_speed"] += 1
    logger.debug("landed, score=%d thrust=%d", session["score"], ship["thrust_speed"])


def destroy_ship(session):
    ship = session["ship"]
    if ship["lives"] <= 1:
        if session["score"] > session["top_score"]:
            session["top_score"] = session["score"]
            logger.info("new top score: %d", session["top_score"])
        logger.info("game over, score=%d", session["score"])
        session["score"] = 0
        session["target"] = new_target(session["rng"], session["width"], session["height"])
        session["ship"] = new_ship(session["height"])
        session["playing"] = False
    else:
        ship["lives"] -= 1
        reset_ship(ship, session["height"])


def gravity(score):
    return GRAVITY + (score / 5) ** 2


def drift_target(target, width, height, score):
    if score >= DRIFT_X_SCORE:
        if target["pos"].x <= 0 or target["pos"].x + target["width"] >= width:
            target["direction_x"] *= -1
        target["pos"].x += target["direction_x"]
    if score >= DRIFT_Y_SCORE:
        if target["pos"].y <= 0 or target["pos"].y + target["height"] >= height:
            target["direction_y"] *= -1
        target["pos"].y += target["direction_y"]


def step(session):
    session["flame"] = False
    state = game_state(session)
    if state == "idle":
        return state

    ship = session["ship"]
    if state == "exploding":
        ship["explode_time"] -= 1
        if ship["explode_time"] <= 0:
            destroy_ship(session)
        return game_state(session)

    fps = session["fps"]
    if ship["fuel"] <= 0:
        ship["thrusting"] = False

    hit = classify_collision(ship, session["target"], session["height"])
    if hit == "landing":
        if is_safe_landing(ship):
            land_ship(session)
        else:
            explode_ship(session)
    elif hit is not None:
        explode_ship(session)
    elif ship["thrusting"]:
        ship["vel"].x += ship["thrust_speed"] * math.cos(ship["angle"]) / fps
        ship["vel"].y -= ship["thrust_speed"] * math.sin(ship["angle"]) / fps
        ship["fuel"] -= 1
        session["flame"] = True
    else:
        ship["vel"].x -= FRICTION * ship["vel"].x / fps
        if ship["vel"].y < 0:
            ship["vel"].y -= FRICTION * ship["vel"].y / fps
        ship["vel"].y += gravity(session["score"]) / fps

    ship["angle"] += ship["rot"]
    ship["pos"] += ship["vel"]

    drift_target(session["target"], session["width"], session["height"], session["score"])

    # soft bounce off the side walls
    if ship["pos"].x < ship["r"]:
        ship["vel"].x = 1
    elif ship["pos"].x > session["width"] - ship["r"]:
        ship["vel"].x = -1

    return game_state(session)
