"""VHI Dashboard package.

Organized by feature modules (resources, timesheet, cam_status, ...) with a thin
Flask controller layer over service/repository layers. The period grid, snapshot
merge and attendance aggregation logic lives in ``periods`` and has no I/O.
"""
