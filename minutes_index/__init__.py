"""Minutes index generator.

Harvests published meeting minutes, extracts their table of contents and
resolution summaries, and renders them into HTML index pages.
"""

__version__ = "0.1.0"
