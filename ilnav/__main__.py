"""Run "python -m ilnav"."""

import sys

from .main import main

sys.exit(main())
