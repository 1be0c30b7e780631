"""
FastAPI application wiring (app, lifespan, exception handlers).
"""
