"""Routing — ordered route table with segment-wise matching.

Routes are registered during setup and frozen when the app serves its
first request.
"""
