"""Configuration: rules-file models, discovery, settings, logging."""
