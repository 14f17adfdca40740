import sys

from alert_deleter.cli import main

sys.exit(main())
