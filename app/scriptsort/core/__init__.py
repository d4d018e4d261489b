"""Core ordering engine: scanning, classification, sorting and assembly."""
