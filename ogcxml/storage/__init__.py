"""Export of parsed capabilities documents."""
