"""Core building blocks: identity, shapes, record stores, translation, settings, logging."""
