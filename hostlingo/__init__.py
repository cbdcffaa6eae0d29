"""Host/guest message translation service."""
