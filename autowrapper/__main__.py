"""Enable running autowrapper as a module: python -m autowrapper"""

import sys

from autowrapper import (
    cli,
)

if __name__ == "__main__":
    # pylint: disable=no-value-for-parameter
    sys.exit(cli())
