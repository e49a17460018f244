"""
Utility modules for the medical center application.

Currently holds the datetime helpers shared by models, request parsing and
the appointment endpoints.
"""

from utils.datetime_utils import utc_now, parse_date_string, parse_time_string

__all__ = ['utc_now', 'parse_date_string', 'parse_time_string']
