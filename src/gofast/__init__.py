"""GoFast run draft service.

Turns pasted Strava, web and social text about a group run into
structured run fields and a ready-to-edit description.
"""

__version__ = "0.1.0"
