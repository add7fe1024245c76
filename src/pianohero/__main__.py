"""Entry point for `python -m pianohero` or the `pianohero` console script."""

import argparse
import logging

from pianohero.app import App


def main() -> None:
    parser = argparse.ArgumentParser(description="Piano Hero — falling-note rhythm game")
    parser.add_argument("--level", type=int, default=0, help="Starting level (0 = Beginner)")
    parser.add_argument("--db", default="", help="SQLite file for scores (default ~/.pianohero/scores.db)")
    parser.add_argument("--soundfont", default="", help="SoundFont (.sf2) used for sound cues")
    parser.add_argument("--no-audio", action="store_true", help="Run without sound")
    parser.add_argument("--seed", type=int, default=None, help="Seed for note generation")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    app = App(
        level=args.level,
        db_path=args.db or None,
        soundfont=args.soundfont or None,
        audio_enabled=not args.no_audio,
        seed=args.seed,
    )
    app.run()


if __name__ == "__main__":
    main()
