import sys

from wxboard.cli import main

sys.exit(main())
