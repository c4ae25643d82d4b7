"""Configuration, logging and error plumbing shared by the cleaner."""
