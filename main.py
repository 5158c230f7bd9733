import sys

from cpm.cli import main

if __name__ == "__main__":
    # sys.exit(main(["testsets/software.yaml", "--view", "pert"]))
    sys.exit(main())
