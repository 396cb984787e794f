import sys

from termview.cli import main

sys.exit(main())
