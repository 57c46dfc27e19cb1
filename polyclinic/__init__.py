# polyclinic/__init__.py
"""Clinic management API: patients, doctors, appointments and users."""
