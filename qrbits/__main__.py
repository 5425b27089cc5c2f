import argparse

from qrbits.debug import Debug
from qrbits.replay import describe, load_script, replay


def get_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="qrbits",
        description="Replay a YAML append script into a bit buffer and dump it",
    )

    parser.add_argument(
        "script_path",
        help="Path to the append script",
        nargs="?",
        default="config/replay.yaml",
    )

    parser.add_argument(
        "-d",
        "--enable_debug",
        help="Enable debug output",
        action="store_true",
    )

    return parser.parse_args(argv)


def main(argv=None):
    args = get_args(argv)
    Debug.enable(args.enable_debug)

    Debug.log(f"Loading script {args.script_path}")
    steps = load_script(args.script_path)
    buffer = replay(steps)

    print(describe(buffer))


if __name__ == "__main__":
    main()
