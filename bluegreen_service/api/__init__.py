"""
FastAPI route modules for the blue/green pool service.
"""
