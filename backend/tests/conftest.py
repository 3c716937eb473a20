"""Root conftest: shared test configuration."""

import os

from tests.fakes import TEST_SECRET

# Ensure tests never pick up a real signing secret
os.environ.setdefault("TOKEN_SECRET", TEST_SECRET)
