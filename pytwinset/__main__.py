import sys

from pytwinset.cli import main

sys.exit(main())
