"""Configuration loading and component factories."""
