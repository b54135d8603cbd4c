"""Chat command parsing and handling."""
