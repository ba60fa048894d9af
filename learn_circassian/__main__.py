import sys

from learn_circassian.cli import main

if __name__ == "__main__":
    sys.exit(main())
