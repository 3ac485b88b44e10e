"""Test helpers for hostel NOC tests.

Helpers:
    build_harness: Workflow service wired to in-memory stubs
    make_snapshot: Student profile snapshot factory
    make_request: PENDING NocRequest factory

Usage:
    from tests.helpers.noc_factories import build_harness
"""
