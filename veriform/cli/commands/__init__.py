"""Click commands registered on the ``veriform`` group."""
