"""Travel agency enrollment service package."""
