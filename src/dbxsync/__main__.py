import sys

from dbxsync.cli import main

sys.exit(main())
