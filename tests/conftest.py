"""Shared test setup for sess_core tests."""

import os
import tempfile

# Keep the command log out of the real home directory.  Set before any
# sess_core module is imported, since loggers are configured at import.
os.environ["SESS_HOME"] = tempfile.mkdtemp(prefix="sess-test-")
