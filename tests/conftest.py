"""Root conftest.py - Setup Python path for tests"""

import sys
from pathlib import Path

# Add packages and shared test doubles to Python path
root_dir = Path(__file__).parent.parent
packages_dir = root_dir / "packages"
tests_dir = root_dir / "tests"

sys.path.insert(0, str(packages_dir))
sys.path.insert(0, str(tests_dir))
