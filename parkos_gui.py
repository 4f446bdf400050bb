#!/usr/bin/env python3
"""GUI entry point.

The GUI implementation lives in `parkos_profile.gui.app`.
"""

from parkos_profile.gui.app import main


if __name__ == "__main__":
    main()
