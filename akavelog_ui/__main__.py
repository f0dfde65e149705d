import sys

from akavelog_ui.cli import main

sys.exit(main())
