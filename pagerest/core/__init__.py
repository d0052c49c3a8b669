"""Configuration and logging shared by the client modules."""
