import sys

from docker_mongo.cli import main

if __name__ == "__main__":
    sys.exit(main())
