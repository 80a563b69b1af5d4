"""Shared building blocks: errors, version parsing, hooks and cache stores."""
