"""Entry point for `python -m organizze`."""

import sys


def main():
    from organizze.app import run_app
    sys.exit(run_app())


if __name__ == "__main__":
    main()
