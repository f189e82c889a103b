import sys

from log_transform.cli import main

sys.exit(main())
