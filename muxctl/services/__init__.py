"""Configuration and operation logging services."""
