"""
API Application Factory
FastAPI app creation, error handlers and middleware
"""
