"""NetHunter device installer.

Core design goals:
- One fixed procedure, parameterized by a device profile
- Live status checks around every mode change
- Every failure classified into a stable exit code
- No retries of device-mutating commands
"""

__version__ = "1.1.0"

__all__ = ["__version__"]
