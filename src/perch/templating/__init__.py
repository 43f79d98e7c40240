"""Kida integration for the go-import discovery page."""
