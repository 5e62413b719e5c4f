import sys

from headlinebot.bot import main

if __name__ == "__main__":
    sys.exit(main())
