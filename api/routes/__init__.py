"""
Routes module for the recurrence preview API.

- recurrence: rule validation and occurrence preview
"""
