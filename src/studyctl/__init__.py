"""studyctl — study tracker for syllabus, PYQs, notes, and attendance."""

__version__ = "0.1.0"
