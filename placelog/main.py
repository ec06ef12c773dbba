import sys

from placelog.interface.cli import main

if __name__ == "__main__":
    sys.exit(main())
