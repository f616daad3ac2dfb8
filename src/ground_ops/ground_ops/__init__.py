"""Ground Operations staffing package.

Organized by feature modules (employees, stations, operations, assignments,
scheduling) with a thin Flask controller layer over service/repository layers.
The scheduling package holds the staffing core: overlap checks, availability,
staffing requirements, assignment validation and the staffing optimizer.
"""
