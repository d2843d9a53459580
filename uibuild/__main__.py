# SPDX-License-Identifier: MIT
"""Allow ``python -m uibuild``."""

import sys

from uibuild.cli import main

sys.exit(main())
