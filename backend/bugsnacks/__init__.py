"""BugSnacks - campus bug-bounty API"""

__version__ = "1.0.0"
