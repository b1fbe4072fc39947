from pathlib import Path
import sys

# Ensure the project sources are on the Python path
ROOT = Path(__file__).resolve().parent.parent / "project"
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
