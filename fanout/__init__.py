"""Push-notification fan-out service package."""
