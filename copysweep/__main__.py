import sys

from copysweep.cli import main

sys.exit(main())
