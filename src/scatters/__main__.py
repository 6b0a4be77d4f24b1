import sys

from scatters.cli import main

sys.exit(main())
