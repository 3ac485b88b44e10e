"""
Hostel NOC - exit-clearance workflow for hostel administration

A student (or a warden on the student's behalf) requests a
No-Objection-Certificate, a warden physically verifies a configurable
checklist, and an administrator gives final approval, which
permanently deactivates the student's account.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
