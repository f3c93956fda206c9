"""
Core pipeline: schema → validation → inference → reports.
"""
