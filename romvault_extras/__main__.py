import sys

from romvault_extras.cli import main

sys.exit(main())
