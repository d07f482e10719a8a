"""Built-in sub-command groups of the ``nominatim-client`` CLI."""
