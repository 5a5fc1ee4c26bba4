import os

# Keep CLI tests independent of a config.yaml in the working directory
os.environ.setdefault("CHANNEL_SYNC_CONFIG", "tests/does-not-exist.yaml")

from tests.fixtures import *  # noqa: F401,F403,E402
