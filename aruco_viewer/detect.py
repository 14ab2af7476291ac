import sys

from .cli import detect_main


if __name__ == "__main__":
    sys.exit(detect_main())
