import sys

from ascnconv.cli import main

sys.exit(main())
