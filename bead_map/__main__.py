import sys

from bead_map.cli import main

sys.exit(main())
