"""Allow ``python -m git_worktree_launcher``."""

import sys

from .cli.main import main

if __name__ == "__main__":
    sys.exit(main())
