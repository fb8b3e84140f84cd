"""HTTP surface of the Linkboard application."""
