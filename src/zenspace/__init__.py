"""zenspace: a personal note and blog editor with AI augmentation."""

__version__ = "0.1.0"
