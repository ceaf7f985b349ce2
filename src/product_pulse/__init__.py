"""Product Pulse — private-repository pulse dashboard.

A relay service aggregates GitHub commits, pull requests, issues and
contributors for one repository; a Textual dashboard renders the result.
"""

__version__ = "0.1.0"
