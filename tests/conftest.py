import sys
from pathlib import Path

import pytest

# project root = one level above "tests"
root = Path(__file__).resolve().parents[1]
src = root / "src"

# put src/ on sys.path when the package is not installed
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from iban_helper.registry.storage import IbanStorage  # noqa: E402


@pytest.fixture(scope="session")
def registry():
    return IbanStorage()
