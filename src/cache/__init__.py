"""Fingerprint-keyed cache of extracted document text."""
