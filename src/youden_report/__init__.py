"""Presentation helpers for Youden plot results.

This package contains the collaborators that consume a
:class:`youden.result.YoudenResult`: CSV loading, group colors, report
tables, Matplotlib rendering and the ``youdenplot`` command-line tool. The
computational core in :mod:`youden` never imports from here.
"""
