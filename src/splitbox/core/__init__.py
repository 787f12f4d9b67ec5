"""Preparation, chunking and the execution boundary."""
