import sys

from variates.cli import main

sys.exit(main())
