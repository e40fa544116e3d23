import sys

from consolenotes.cli import main

sys.exit(main())
