"""Data layer: MongoDB connection management, models and repositories."""
