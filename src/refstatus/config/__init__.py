"""Configuration loading and defaults for refstatus.

Main components:
- ConfigLoader (refstatus.config.loader): load and validate refstatus.yml
- Default provider and cache settings (refstatus.config.defaults)
"""
