"""Core backend infrastructure for the race logger.

This package contains configuration, logging, database, password hashing and
dependency helpers shared by repositories, policies and services.
"""
