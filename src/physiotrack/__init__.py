"""PhysioTrack package.

Organized by feature modules (users, sessions, signature, payroll) with a thin
Flask controller layer on top of service and storage layers.
"""
