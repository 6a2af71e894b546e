"""RedNote Re-Creator: analyze a source article, edit the analysis, generate a new one."""

__version__ = "0.1.0"
