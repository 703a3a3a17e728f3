import logging

from chase.game import Game


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    Game().run()


if __name__ == "__main__":
    main()
