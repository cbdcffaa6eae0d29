"""Guest/host translation cycle and its prompts."""
