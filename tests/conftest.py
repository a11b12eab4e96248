# Ensure repository root is on sys.path for imports like `from mgsviz.transport import ...`
import os
import sys

import matplotlib

matplotlib.use("Agg")

_REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)
