"""Attendance Portal package.

Feature modules (users, sites, attendance, storage) with a thin Flask
controller layer on top of service/repository layers.
"""
