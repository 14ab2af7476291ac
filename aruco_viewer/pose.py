import sys

from .cli import pose_main


if __name__ == "__main__":
    sys.exit(pose_main())
