"""Fantasy football draft assistant: live draft reconciliation and pick recommendations."""

__version__ = "0.1.0"
