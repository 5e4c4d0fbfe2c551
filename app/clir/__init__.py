"""clir - a rule-driven command line cleaning utility.

Register paths or glob patterns once, then list how much space they
take up and clean them all in one go.
"""

__version__ = "0.3.0"
