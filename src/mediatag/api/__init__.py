"""HTTP adapter for the mediatag tagging core."""
