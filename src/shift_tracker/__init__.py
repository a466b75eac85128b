"""Shift Tracker package.

Organized by feature modules (shifts, users, notifications) with a thin Flask
controller layer on top of service/repository layers.
"""
