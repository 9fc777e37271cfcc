"""story_reader - reading progress, persona ranking and persona classification."""

__version__ = "0.1.0"
