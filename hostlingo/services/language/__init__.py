"""Language tags, guest locales, detection and script checks."""
