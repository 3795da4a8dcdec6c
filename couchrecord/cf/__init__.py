"""Core framework.

Components the record layer builds upon but that know nothing about records:
the HTTP transport to the document store and the database migrator.
"""
