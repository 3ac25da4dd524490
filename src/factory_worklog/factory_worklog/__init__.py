"""Factory Worklog package.

Daily personnel attendance and work-log form, organized by feature modules
(records, operators, form, export) with a thin Flask controller layer over
service/repository layers.
"""
