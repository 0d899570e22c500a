import argparse
import logging
import sys

import pygame

import lander
import render
import storage
from scheduler import FixedTickScheduler


logger = logging.getLogger(__name__)

RENDER_FPS = 60

KEY_DOWN_INPUTS = {
    pygame.K_RETURN: "start",
    pygame.K_SPACE: "thrust-on",
    pygame.K_LEFT: "rotate-left-on",
    pygame.K_RIGHT: "rotate-right-on",
}

KEY_UP_INPUTS = {
    pygame.K_SPACE: "thrust-off",
    pygame.K_LEFT: "rotate-left-off",
    pygame.K_RIGHT: "rotate-right-off",
}


def setup_logging(level="INFO"):
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            handlers=[logging.StreamHandler(sys.stdout)],
        )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Lunar Lander")
    parser.add_argument("--width", type=int, default=lander.WIDTH)
    parser.add_argument("--height", type=int, default=lander.HEIGHT)
    parser.add_argument("--fps", type=int, default=lander.FPS, help="simulation ticks per second")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--save-path", default=storage.SAVE_PATH)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def input_for_event(event):
    if event.type == pygame.KEYDOWN:
        return KEY_DOWN_INPUTS.get(event.key)
    if event.type == pygame.KEYUP:
        return KEY_UP_INPUTS.get(event.key)
    return None


def load_top_score(path):
    try:
        return storage.load_top_score(path)
    except storage.StorageError as e:
        logger.warning("ignoring save file: %s", e)
        return 0


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    session = lander.new_session(
        width=args.width,
        height=args.height,
        fps=args.fps,
        seed=args.seed,
        top_score=load_top_score(args.save_path),
    )
    logger.info(
        "starting %dx%d at %d ticks/s, seed=%d, top score=%d",
        args.width,
        args.height,
        args.fps,
        session["seed"],
        session["top_score"],
    )

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Lunar Lander")
    clock = pygame.time.Clock()
    fonts = render.load_fonts()

    scheduler = FixedTickScheduler.from_rate(args.fps, lambda: lander.step(session))
    saved_top_score = session["top_score"]

    running = True
    while running:
        clock.tick(RENDER_FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            else:
                name = input_for_event(event)
                if name is not None:
                    lander.apply_input(session, name)

        scheduler.poll()

        if session["top_score"] > saved_top_score:
            storage.save_top_score(session["top_score"], args.save_path)
            saved_top_score = session["top_score"]
            logger.info("saved top score %d to %s", saved_top_score, args.save_path)

        render.draw_frame(screen, render.build_frame(session), fonts)
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
