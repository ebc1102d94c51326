"""Per-generation record formats and the cipher they share."""
