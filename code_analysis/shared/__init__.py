"""Shared configuration, logging, errors and database plumbing."""
