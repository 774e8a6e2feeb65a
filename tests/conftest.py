"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def mock_repo_root(temp_dir):
    """Create a mock git repository root directory."""
    # Create .git directory to simulate a git repo
    repo_root = temp_dir / "repo"
    (repo_root / ".git").mkdir(parents=True)
    return repo_root


@pytest.fixture
def global_config_dir(temp_dir, mocker):
    """Redirect the global config directory into the temp directory."""
    config_dir = temp_dir / "home" / ".config" / "aic"
    mocker.patch("aic.global_config._CONFIG_DIR", config_dir)
    return config_dir


@pytest.fixture
def in_repo(mock_repo_root, global_config_dir, monkeypatch):
    """Run the test from inside the mock repository with an isolated global config."""
    monkeypatch.chdir(mock_repo_root)
    return mock_repo_root


@pytest.fixture
def sample_diff():
    """Sample staged diff for testing."""
    return """diff --git a/src/greet.py b/src/greet.py
index 1234567..89abcde 100644
--- a/src/greet.py
+++ b/src/greet.py
@@ -1,3 +1,4 @@
+import os
 def main():
-    print("Hello, world!")
+    print(f"Hello, {os.environ.get('USER', 'world')}!")
"""


@pytest.fixture
def sample_commit_message():
    """Sample generated commit message."""
    return "feat(greet): greet the current user by name"
